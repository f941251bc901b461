"""Naming rules for alias-registered rendering plug-ins."""

from __future__ import annotations

from typing import List

from .base import Rule
from ..constants import (
    ALIAS,
    ALIAS_SEPARATORS,
    ALIASLESS_RENDERERS,
    KIND_CAPABILITY,
    LEGACY_ALIAS_EXCEPTIONS,
    RENDERER_SUFFIX,
    RENDERING_BASE,
    WRAPPER_BASE,
    WRAPPER_SUFFIX,
)
from ..models import DeclaredType, ModuleSnapshot, Violation


def expected_class_name(alias: str, *, wrapper: bool) -> str:
    """Return the class name an alias maps to, e.g. ``foo-bar`` -> ``FooBarLayoutRenderer``."""
    stripped = alias
    for separator in ALIAS_SEPARATORS:
        stripped = stripped.replace(separator, "")
    return stripped + (WRAPPER_SUFFIX if wrapper else RENDERER_SUFFIX)


def _renderers(snapshot: ModuleSnapshot) -> List[DeclaredType]:
    return [
        declared
        for declared in snapshot
        if declared.kind != KIND_CAPABILITY and snapshot.is_subclass_of(declared, RENDERING_BASE)
    ]


class AliasNamingRule(Rule):
    """Concrete renderers are named after their alias plus the family suffix."""

    name = "alias-naming"
    description = "Rendering plug-in class names match their registered alias."

    def evaluate(self, snapshot: ModuleSnapshot) -> List[Violation]:
        violations: List[Violation] = []
        for declared in _renderers(snapshot):
            aliases = declared.annotations_of(ALIAS)
            if declared.abstract or not aliases:
                continue
            if declared.short_name in LEGACY_ALIAS_EXCEPTIONS:
                continue
            alias = aliases[0].value or ""
            expected = expected_class_name(
                alias, wrapper=snapshot.is_subclass_of(declared, WRAPPER_BASE)
            )
            if expected.casefold() != declared.short_name.casefold():
                violations.append(
                    self.violation(
                        declared.name,
                        f"alias '{alias}' expects class name '{expected}' but found "
                        f"'{declared.short_name}'",
                    )
                )
        return violations


class AliasAbstractnessRule(Rule):
    """Aliased renderers must be instantiable and alias-less ones abstract."""

    name = "alias-abstractness"
    description = "Only concrete rendering plug-ins carry an alias."

    def evaluate(self, snapshot: ModuleSnapshot) -> List[Violation]:
        violations: List[Violation] = []
        for declared in _renderers(snapshot):
            if declared.has_annotation(ALIAS):
                if declared.abstract:
                    violations.append(
                        self.violation(declared.name, f"carries an {ALIAS} and cannot be abstract")
                    )
            elif not declared.abstract and declared.name not in ALIASLESS_RENDERERS:
                violations.append(
                    self.violation(declared.name, f"has no {ALIAS} and must be abstract")
                )
        return violations
