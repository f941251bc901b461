"""Convention rule implementations and discovery utilities."""

from __future__ import annotations

from functools import partial
from importlib import metadata
from typing import Callable, Dict, Iterable, List, Sequence

from ..logging import get_logger
from .aliases import AliasAbstractnessRule, AliasNamingRule
from .annotations import CapabilityAnnotationRule
from .base import Rule
from .options import RequiredOptionTypingRule, SingleDefaultOptionRule
from .visibility import VisibilityLocalityRule

_ENTRY_POINT_GROUP = "apiaudit.rules"

logger = get_logger("rules")

_BUILTIN_FACTORIES: Dict[str, Callable[[], Rule]] = {
    VisibilityLocalityRule.name: VisibilityLocalityRule,
    CapabilityAnnotationRule.name: CapabilityAnnotationRule,
    RequiredOptionTypingRule.name: RequiredOptionTypingRule,
    SingleDefaultOptionRule.name: SingleDefaultOptionRule,
    AliasNamingRule.name: AliasNamingRule,
    AliasAbstractnessRule.name: AliasAbstractnessRule,
}


def discover_rules(enabled: Sequence[str] | None = None) -> List[Rule]:
    """Instantiate built-in and plugin rules, optionally restricted to ``enabled`` names.

    Names match case-insensitively. Plugins are only imported when selected, and
    requesting a name no rule registers raises :class:`ValueError`.
    """

    registry = _rule_registry()
    if enabled is None:
        return [factory() for factory in registry.values()]

    wanted = {name.strip().lower() for name in enabled}
    unknown = sorted(wanted.difference(registry))
    if unknown:
        raise ValueError(f"Unknown rules requested: {', '.join(unknown)}")
    return [factory() for key, factory in registry.items() if key in wanted]


def _rule_registry() -> Dict[str, Callable[[], Rule]]:
    registry: Dict[str, Callable[[], Rule]] = dict(_BUILTIN_FACTORIES)
    for entry in _iter_entry_points():
        key = entry.name.lower()
        if key in registry:
            logger.warning("Ignoring rule plugin '%s': the name is already registered", entry.name)
            continue
        registry[key] = partial(_load_plugin, entry)
    return registry


def _load_plugin(entry: metadata.EntryPoint) -> Rule:
    try:
        loaded = entry.load()
    except Exception as exc:
        raise RuntimeError(f"Failed to load rule plugin '{entry.name}': {exc}") from exc
    if isinstance(loaded, Rule):
        return loaded
    instance = loaded() if callable(loaded) else None
    if not isinstance(instance, Rule):
        raise TypeError(f"Rule plugin '{entry.name}' must be a Rule, a Rule subclass or a factory")
    return instance


def _iter_entry_points() -> Iterable[metadata.EntryPoint]:
    return metadata.entry_points().select(group=_ENTRY_POINT_GROUP)


__all__ = [
    "AliasAbstractnessRule",
    "AliasNamingRule",
    "CapabilityAnnotationRule",
    "RequiredOptionTypingRule",
    "Rule",
    "SingleDefaultOptionRule",
    "VisibilityLocalityRule",
    "discover_rules",
]
