"""Configuration loading for apiaudit (.apiaudit.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".apiaudit.yml"
REPORT_FORMATS = ("text", "json")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class RulesConfig:
    """Convention rule selection."""

    enabled: Optional[List[str]] = None


@dataclass
class AuditConfig:
    """Represents the settings defined in .apiaudit.yml.

    The root set and the legacy alias exceptions are deliberately absent: they
    live in :mod:`apiaudit.constants` next to the rules.
    """

    root: Path
    snapshot: Optional[Path] = None
    rules: RulesConfig = field(default_factory=RulesConfig)
    report_format: str = "text"
    log_file: Optional[Path] = None


def load_config(config_path: Path) -> AuditConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return AuditConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    snapshot_str = _as_str(data.get("snapshot"))
    snapshot = root / snapshot_str if snapshot_str else None

    rules = RulesConfig()
    rules_data = _as_dict(data.get("rules"))
    if rules_data and rules_data.get("enabled") is not None:
        rules.enabled = _as_str_list(rules_data.get("enabled"))

    report_data = _as_dict(data.get("report"))
    report_format = (_as_str(report_data.get("format")) or "text").lower()
    if report_format not in REPORT_FORMATS:
        raise ConfigError(
            f"Unsupported report format '{report_format}' (expected one of {', '.join(REPORT_FORMATS)})"
        )

    log_file_str = _as_str(data.get("log_file"))
    log_file = root / log_file_str if log_file_str else None

    return AuditConfig(
        root=root,
        snapshot=snapshot,
        rules=rules,
        report_format=report_format,
        log_file=log_file,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []
