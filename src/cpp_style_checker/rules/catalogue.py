"""Built-in ME 101 style checks.

Every check is a pure function ``(lines, index) -> message | None`` evaluated
against the line at ``index``. Checks only look at raw text: comment detection
is either "trimmed line starts with ``//``" or "line contains ``//``", and each
check keeps whichever of the two it was written with.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from ..models import FindingSeverity

CheckFunction = Callable[[Sequence[str], int], Optional[str]]

# Browser whitespace (regex ``\s`` and String.trim()): NBSP, the U+2000 block,
# line separators and the BOM count; U+001C-U+001F and U+0085 do not.
WHITESPACE = (
    "\t\n\v\f\r \u00a0\u1680"
    + "".join(map(chr, range(0x2000, 0x200B)))
    + "\u2028\u2029\u202f\u205f\u3000\ufeff"
)
# ``\w``/``\d``/``\b`` stay ASCII through re.ASCII; whitespace uses this class.
_WS = r"[\t\n\v\f\r \u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff]"

_PRIMITIVE_TYPES = r"(int|double|float|char|long|short|bool)"

_SINGLE_LETTER_DECLARATION = re.compile(
    r"\b" + _PRIMITIVE_TYPES + _WS + r"+([a-z])" + _WS + r"*=", re.IGNORECASE | re.ASCII
)
_MAGIC_NUMBER = re.compile(r"[=+\-*/]" + _WS + r"*\d+\.\d+", re.ASCII)
_CONSTANT_DECLARATION = re.compile(
    r"const" + _WS + r"+\w+" + _WS + r"+([a-zA-Z_][a-zA-Z0-9_]*)" + _WS + r"*=", re.ASCII
)
_UNINITIALIZED_DECLARATION = re.compile(
    r"\b" + _PRIMITIVE_TYPES + _WS + r"+[a-zA-Z_][a-zA-Z0-9_]*" + _WS + r"*;", re.ASCII
)
_CONDITION = re.compile(r"(if|while|for)" + _WS + r"*\([^)]+\)", re.ASCII)
_CONDITION_SPACING_PATTERNS = (
    re.compile(r"\w+[<>=!]{1,2}\w+", re.ASCII),
    re.compile(r"\w+&&\w+", re.ASCII),
    re.compile(r"\w+\|\|\w+", re.ASCII),
    re.compile(r"\w+[+\-*/]\w+", re.ASCII),
)
_EXPRESSION_SPACING_PATTERNS = (
    re.compile(r"\w+[<>=!]{2}\w+", re.ASCII),
    re.compile(r"\w+&&\w+", re.ASCII),
    re.compile(r"\w+\|\|\w+", re.ASCII),
)
_STATEMENT_AFTER_CONDITION = re.compile(
    r"if" + _WS + r"*\([^)]+\)" + _WS + r"*[a-zA-Z]", re.ASCII
)
_BRACE_AFTER_PAREN = re.compile(r"\)" + _WS + r"*{")
_LEADING_SPACES = re.compile(r"^( *)")
_LEADING_TABS = re.compile(r"^\t+")
_LEADING_SPACE_RUN = re.compile(r"^ +")

_CONTROL_KEYWORDS = ("if", "for", "while", "else")
_FILE_STREAM_LOOKAHEAD = 4


@dataclass(frozen=True, slots=True)
class StyleCheck:
    """One row of the rule table."""

    check_id: str
    rule: str
    severity: FindingSeverity
    function: CheckFunction
    description: str = ""


def leading_spaces(line: str) -> int:
    """Return the number of space characters at the start of ``line``."""

    match = _LEADING_SPACES.match(line)
    return len(match.group(1)) if match else 0


def strip_whitespace(text: str) -> str:
    """Trim ``WHITESPACE`` from both ends of ``text``."""

    return text.strip(WHITESPACE)


def _is_line_comment(line: str) -> bool:
    return strip_whitespace(line).startswith("//")


def _has_comment_marker(line: str) -> bool:
    return "//" in line


# ----------------------------------------------------------------------
def check_single_letter_variable(lines: Sequence[str], index: int) -> Optional[str]:
    line = lines[index]
    if _is_line_comment(line) or not _SINGLE_LETTER_DECLARATION.search(line):
        return None
    return (
        'Avoid single-letter variable names. Use descriptive names like "target_x" '
        'or "milesPerHour".'
    )


def check_magic_number(lines: Sequence[str], index: int) -> Optional[str]:
    line = lines[index]
    # Substring test: "myconstant" also suppresses the check.
    if _is_line_comment(line) or "const" in line:
        return None
    if not _MAGIC_NUMBER.search(line):
        return None
    return "Use named constants instead of magic numbers (e.g., const double US_TO_CDN = 1.252)."


def check_constant_naming(lines: Sequence[str], index: int) -> Optional[str]:
    match = _CONSTANT_DECLARATION.search(lines[index])
    if not match:
        return None
    name = match.group(1)
    if name == name.upper():
        return None
    return f"Constant '{name}' should be in ALL_CAPS (e.g., MAX_SIZE, not {name})."


def check_uninitialized_variable(lines: Sequence[str], index: int) -> Optional[str]:
    line = lines[index]
    if not _UNINITIALIZED_DECLARATION.search(line) or _has_comment_marker(line):
        return None
    return "Variables should be initialized when declared (e.g., int x = 0;)."


def check_condition_spacing(lines: Sequence[str], index: int) -> Optional[str]:
    line = lines[index]
    if _is_line_comment(line):
        return None
    match = _CONDITION.search(line)
    if not match:
        return None
    condition = match.group(0)
    if not any(pattern.search(condition) for pattern in _CONDITION_SPACING_PATTERNS):
        return None
    return "Use spaces around operators. Example: if ( x <= 5 && y >= 0 || z == 8 )"


def check_expression_spacing(lines: Sequence[str], index: int) -> Optional[str]:
    line = lines[index]
    if _is_line_comment(line):
        return None
    if "if" in line or "while" in line or "for" in line:
        return None
    if not any(pattern.search(line) for pattern in _EXPRESSION_SPACING_PATTERNS):
        return None
    return "Use spaces around operators for better readability."


def check_statement_on_condition_line(lines: Sequence[str], index: int) -> Optional[str]:
    line = lines[index]
    if not _STATEMENT_AFTER_CONDITION.search(line) or _has_comment_marker(line):
        return None
    return "Statement should be on a separate line from the condition."


def check_brace_placement(lines: Sequence[str], index: int) -> Optional[str]:
    line = lines[index]
    if not _BRACE_AFTER_PAREN.search(line) or _is_line_comment(line):
        return None
    return "Opening brace should be on its own line."


def check_opening_brace_alignment(lines: Sequence[str], index: int) -> Optional[str]:
    line = lines[index]
    if strip_whitespace(line) != "{" or _has_comment_marker(line):
        return None

    brace_indent = leading_spaces(line)
    for position in range(index - 1, -1, -1):
        previous = strip_whitespace(lines[position])
        if not previous or previous.startswith("//"):
            continue
        previous_indent = leading_spaces(lines[position])
        if previous_indent == brace_indent:
            return None
        return (
            "Opening brace should align with its control structure "
            f"(expected {previous_indent} spaces, found {brace_indent} spaces)."
        )
    return None


def check_closing_brace_alignment(lines: Sequence[str], index: int) -> Optional[str]:
    line = lines[index]
    if strip_whitespace(line) != "}" or _has_comment_marker(line):
        return None

    brace_indent = leading_spaces(line)
    depth = 1
    for position in range(index - 1, -1, -1):
        candidate = strip_whitespace(lines[position])
        if candidate == "}":
            depth += 1
        elif candidate == "{":
            depth -= 1
            if depth == 0:
                open_indent = leading_spaces(lines[position])
                if open_indent == brace_indent:
                    return None
                return (
                    "Closing brace should align with opening brace "
                    f"(expected {open_indent} spaces, found {brace_indent} spaces)."
                )
    # Unbalanced: no matching opener, nothing to report.
    return None


def check_file_stream(lines: Sequence[str], index: int) -> Optional[str]:
    line = lines[index]
    if "ifstream" not in line and "ofstream" not in line:
        return None
    following = "\n".join(lines[index + 1 : index + 1 + _FILE_STREAM_LOOKAHEAD])
    if "if" in following and "!" in following:
        return None
    return "File streams should be checked for successful opening with if(!fin)."


def check_indentation_granularity(lines: Sequence[str], index: int) -> Optional[str]:
    line = lines[index]
    if not strip_whitespace(line) or _is_line_comment(line):
        return None
    spaces = _LEADING_SPACE_RUN.match(line)
    if not spaces or _LEADING_TABS.match(line):
        return None
    count = len(spaces.group(0))
    if count % 2 == 0:
        return None
    return f"Indentation should be multiples of 2 spaces. This line has {count} spaces."


def check_indentation_depth(lines: Sequence[str], index: int) -> Optional[str]:
    line = lines[index]
    trimmed = strip_whitespace(line)
    if not trimmed or trimmed.startswith("//"):
        return None
    if trimmed in ("{", "}") or trimmed.startswith(_CONTROL_KEYWORDS):
        return None

    depth = 0
    expected = -1
    for position in range(index - 1, -1, -1):
        candidate = strip_whitespace(lines[position])
        if candidate == "}":
            depth += 1
        elif candidate == "{":
            depth -= 1
            if depth < 0:
                expected = leading_spaces(lines[position]) + 2
                break

    current = leading_spaces(line)
    if expected == -1 or current >= expected:
        return None
    return f"Statement inside block should be indented {expected} spaces (found {current} spaces)."


# ----------------------------------------------------------------------
CHECKS: tuple[StyleCheck, ...] = (
    StyleCheck(
        "single-letter-variable",
        "Variable Naming",
        FindingSeverity.INFO,
        check_single_letter_variable,
        "Primitive declared with a single-letter name.",
    ),
    StyleCheck(
        "magic-number",
        "Magic Numbers",
        FindingSeverity.INFO,
        check_magic_number,
        "Floating-point literal used directly in an expression.",
    ),
    StyleCheck(
        "constant-naming",
        "Constant Naming",
        FindingSeverity.WARNING,
        check_constant_naming,
        "Constant name is not ALL_CAPS.",
    ),
    StyleCheck(
        "uninitialized-variable",
        "Variable Initialization",
        FindingSeverity.WARNING,
        check_uninitialized_variable,
        "Primitive declared without an initializer.",
    ),
    StyleCheck(
        "condition-spacing",
        "Expression Spacing",
        FindingSeverity.WARNING,
        check_condition_spacing,
        "Operator without spaces inside an if/while/for condition.",
    ),
    StyleCheck(
        "expression-spacing",
        "Expression Spacing",
        FindingSeverity.INFO,
        check_expression_spacing,
        "Comparison or logical operator without spaces.",
    ),
    StyleCheck(
        "statement-on-condition-line",
        "Code Structure",
        FindingSeverity.WARNING,
        check_statement_on_condition_line,
        "Statement written on the same line as its if condition.",
    ),
    StyleCheck(
        "brace-placement",
        "Brace Placement",
        FindingSeverity.INFO,
        check_brace_placement,
        "Opening brace follows a closing parenthesis on the same line.",
    ),
    StyleCheck(
        "opening-brace-alignment",
        "Brace Indentation",
        FindingSeverity.WARNING,
        check_opening_brace_alignment,
        "Opening brace not aligned with the line before it.",
    ),
    StyleCheck(
        "closing-brace-alignment",
        "Brace Indentation",
        FindingSeverity.WARNING,
        check_closing_brace_alignment,
        "Closing brace not aligned with its opening brace.",
    ),
    StyleCheck(
        "file-stream-check",
        "File Handling",
        FindingSeverity.WARNING,
        check_file_stream,
        "File stream opened without an if(!stream) check.",
    ),
    StyleCheck(
        "indentation-granularity",
        "Indentation",
        FindingSeverity.INFO,
        check_indentation_granularity,
        "Odd number of leading spaces.",
    ),
    StyleCheck(
        "indentation-depth",
        "Indentation",
        FindingSeverity.WARNING,
        check_indentation_depth,
        "Statement indented less than its enclosing block.",
    ),
)

CHECKS_BY_ID = {check.check_id: check for check in CHECKS}
