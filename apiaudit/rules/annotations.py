"""Pairing rules between implemented capabilities and type annotations."""

from __future__ import annotations

from typing import List

from .base import Rule
from ..constants import (
    APP_DOMAIN_FIXED_OUTPUT,
    RAW_VALUE_CAPABLE,
    RAW_VALUE_CAPABILITY,
    STRING_VALUE_RENDERER,
    STRING_VALUE_RENDERER_CAPABILITY,
    THREAD_AGNOSTIC,
)
from ..models import ModuleSnapshot, Violation


class CapabilityAnnotationRule(Rule):
    """Checks capability/annotation combinations on concrete types.

    Type-level annotations are looked up through module-owned base types, the
    way attribute inheritance works for the audited runtime. A type counts as
    raw-value or string-value-renderer capable when it implements the
    capability or carries the matching marker annotation.
    """

    name = "capability-annotations"
    description = "Raw-value and string-value-renderer types carry consistent annotations."

    def evaluate(self, snapshot: ModuleSnapshot) -> List[Violation]:
        violations: List[Violation] = []
        for declared in snapshot:
            thread_agnostic = snapshot.has_annotation(declared, THREAD_AGNOSTIC, inherit=True)
            fixed_output = snapshot.has_annotation(declared, APP_DOMAIN_FIXED_OUTPUT, inherit=True)

            if not declared.is_capability:
                raw_value = declared.has_annotation(RAW_VALUE_CAPABLE) or snapshot.implements(
                    declared, RAW_VALUE_CAPABILITY
                )
                string_renderer = declared.has_annotation(STRING_VALUE_RENDERER) or snapshot.implements(
                    declared, STRING_VALUE_RENDERER_CAPABILITY
                )

                if raw_value and not thread_agnostic:
                    violations.append(
                        self.violation(
                            declared.name,
                            f"implements {RAW_VALUE_CAPABILITY} but is not annotated {THREAD_AGNOSTIC}",
                        )
                    )
                if string_renderer and fixed_output:
                    violations.append(
                        self.violation(
                            declared.name,
                            f"implements {STRING_VALUE_RENDERER_CAPABILITY} and must not be "
                            f"annotated {APP_DOMAIN_FIXED_OUTPUT}",
                        )
                    )

            if fixed_output and not thread_agnostic:
                violations.append(
                    self.violation(
                        declared.name,
                        f"annotated {APP_DOMAIN_FIXED_OUTPUT} but not {THREAD_AGNOSTIC}",
                    )
                )
        return violations
