"""Style check catalogue and rule set management."""

from .catalogue import CHECKS, CHECKS_BY_ID, WHITESPACE, StyleCheck, leading_spaces, strip_whitespace
from .rule_set_manager import RuleSetError, RuleSetManager, RuleSetting

__all__ = [
    "CHECKS",
    "CHECKS_BY_ID",
    "RuleSetError",
    "RuleSetManager",
    "RuleSetting",
    "StyleCheck",
    "WHITESPACE",
    "leading_spaces",
    "strip_whitespace",
]
