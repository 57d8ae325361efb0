"""Utilities for loading and merging rule set manifest files."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, MutableMapping, Sequence

import yaml

from ..models import FindingSeverity


class RuleSetError(RuntimeError):
    """Raised when rule set manifests cannot be loaded or parsed."""


@dataclass(slots=True)
class RuleSetting:
    """Configuration of a single style check after manifests are merged."""

    check_id: str
    enabled: bool = True
    severity: FindingSeverity | None = None


_DEFAULT_MANIFEST = Path(__file__).resolve().parent / "manifests" / "me101-default.yaml"


class RuleSetManager:
    """Load rule set manifests and expose the enabled checks for the analyzer."""

    def __init__(self, default_manifests: Sequence[Path | str] | None = None) -> None:
        manifest_paths: List[Path]
        if default_manifests is None:
            manifest_paths = []
            if _DEFAULT_MANIFEST.exists():
                manifest_paths.append(_DEFAULT_MANIFEST)
        else:
            manifest_paths = [Path(path) for path in default_manifests]

        self._default_manifests = manifest_paths

    # ------------------------------------------------------------------
    def load(self, manifests: Sequence[Path | str] | None = None) -> List[RuleSetting]:
        """Return the settings defined by the default and supplied manifests."""

        manifest_paths = list(self._default_manifests)
        if manifests:
            manifest_paths.extend(Path(path) for path in manifests)

        settings: MutableMapping[str, RuleSetting] = {}
        for manifest_path in manifest_paths:
            data = self._load_manifest(manifest_path)
            for check_config in data.get("checks", []) or []:
                if not isinstance(check_config, Mapping):
                    continue
                check_id = str(check_config.get("id") or "").strip()
                if not check_id:
                    continue

                setting = settings.get(check_id, RuleSetting(check_id=check_id))
                if "enabled" in check_config:
                    setting.enabled = bool(check_config["enabled"])

                level = check_config.get("severity")
                if isinstance(level, str):
                    try:
                        setting.severity = FindingSeverity(level.strip().lower())
                    except ValueError:
                        pass

                settings[check_id] = setting

        return list(settings.values())

    # ------------------------------------------------------------------
    def enabled_checks(
        self,
        manifests: Sequence[Path | str] | None = None,
        *,
        available: Sequence[str],
    ) -> List[str]:
        """Return the ids from ``available`` that remain enabled after merging."""

        disabled = {setting.check_id for setting in self.load(manifests) if not setting.enabled}
        return [check_id for check_id in available if check_id not in disabled]

    # ------------------------------------------------------------------
    def severity_overrides(
        self, manifests: Sequence[Path | str] | None = None
    ) -> Dict[str, FindingSeverity]:
        return {
            setting.check_id: setting.severity
            for setting in self.load(manifests)
            if setting.severity is not None
        }

    # ------------------------------------------------------------------
    def _load_manifest(self, path: Path) -> Dict[str, Any]:
        if not path.exists():
            raise RuleSetError(f"Rule set manifest not found: {path}")

        try:
            content = path.read_text(encoding="utf-8")
        except OSError as exc:  # pragma: no cover - filesystem errors surfaced to caller
            raise RuleSetError(f"Failed to read rule set manifest {path}") from exc

        try:
            data = yaml.safe_load(content) or {}
        except yaml.YAMLError as exc:
            raise RuleSetError(f"Invalid YAML in rule set manifest {path}") from exc

        if not isinstance(data, Mapping):
            raise RuleSetError(f"Rule set manifest must be a mapping: {path}")

        return dict(data)
