"""Rules for option members exposed to configuration."""

from __future__ import annotations

from typing import List

from .base import Rule
from ..constants import DEFAULT_OPTION, RENDERING_BASE, REQUIRED_OPTION
from ..models import ModuleSnapshot, Violation
from ..typerefs import format_type_ref


class RequiredOptionTypingRule(Rule):
    """Required options must have reference semantics so "unset" is observable."""

    name = "required-option-typing"
    description = "Members annotated required-option must have a reference type."

    def evaluate(self, snapshot: ModuleSnapshot) -> List[Violation]:
        violations: List[Violation] = []
        for declared in snapshot:
            for member in declared.members:
                if not member.has_annotation(REQUIRED_OPTION) or not member.value_type:
                    continue
                type_name = format_type_ref(member.returns) if member.returns else "value type"
                violations.append(
                    self.violation(
                        f"{declared.name}.{member.name}",
                        f"{REQUIRED_OPTION} member has value type {type_name}",
                    )
                )
        return violations


class SingleDefaultOptionRule(Rule):
    """At most one default option per type, and only on rendering-base subclasses."""

    name = "single-default-option"
    description = "A type declares at most one default-option member."

    def evaluate(self, snapshot: ModuleSnapshot) -> List[Violation]:
        violations: List[Violation] = []
        for declared in snapshot:
            defaults = [member for member in declared.members if member.has_annotation(DEFAULT_OPTION)]
            if not defaults:
                continue

            first = defaults[0].name
            if len(defaults) > 1:
                violations.append(
                    self.violation(
                        f"{declared.name}.{first}",
                        f"'{first}' is already the {DEFAULT_OPTION} member; "
                        f"'{defaults[1].name}' declares a second one",
                    )
                )

            if not snapshot.is_subclass_of(declared, RENDERING_BASE):
                violations.append(
                    self.violation(
                        declared.name,
                        f"{DEFAULT_OPTION} is only valid on subclasses of {RENDERING_BASE}",
                    )
                )
        return violations
