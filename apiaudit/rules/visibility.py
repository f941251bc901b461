"""Visibility locality rule."""

from __future__ import annotations

from typing import List

from .base import Rule
from ..constants import INTERNAL_SEGMENT, INTERNAL_VISIBILITY_ALLOW_LIST
from ..models import ModuleSnapshot, Violation


class VisibilityLocalityRule(Rule):
    """Top-level types in an internal namespace must not be externally visible."""

    name = "visibility-locality"
    description = "Types in an internal namespace must be internal."

    def evaluate(self, snapshot: ModuleSnapshot) -> List[Violation]:
        violations: List[Violation] = []
        for declared in snapshot:
            if declared.nested or not declared.is_public:
                continue
            if INTERNAL_SEGMENT not in declared.namespace.split("."):
                continue
            if declared.name in INTERNAL_VISIBILITY_ALLOW_LIST:
                continue
            violations.append(
                self.violation(
                    declared.name,
                    f"public type in internal namespace '{declared.namespace}' should be internal",
                )
            )
        return violations
