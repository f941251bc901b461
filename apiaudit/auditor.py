"""Audit facade combining reachability analysis with convention rules."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from .constants import DEFAULT_ROOT_SET
from .loader import load_snapshot
from .logging import get_logger
from .models import LoadDiagnostic, ModuleSnapshot, Violation
from .reachability import ReachabilityAnalyzer
from .rules import Rule, discover_rules


@dataclass
class AuditReport:
    """Result of one audit run; any violation fails the run."""

    module: str
    unused: List[Violation] = field(default_factory=list)
    conventions: List[Violation] = field(default_factory=list)
    diagnostics: List[LoadDiagnostic] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.unused and not self.conventions

    @property
    def violations(self) -> List[Violation]:
        return self.unused + self.conventions

    def to_dict(self) -> Dict[str, object]:
        return {
            "module": self.module,
            "passed": self.passed,
            "unused": [violation.to_dict() for violation in self.unused],
            "conventions": [violation.to_dict() for violation in self.conventions],
            "diagnostics": [diagnostic.to_dict() for diagnostic in self.diagnostics],
        }

    def raise_for_violations(self) -> None:
        if not self.passed:
            raise AuditFailure(
                f"Audit of {self.module} found {len(self.violations)} violation(s)", self
            )


class AuditFailure(RuntimeError):
    """Raised by :meth:`AuditReport.raise_for_violations` when a run fails."""

    def __init__(self, message: str, report: AuditReport) -> None:
        super().__init__(message)
        self.report = report


class Auditor:
    """Runs every check over one snapshot and accumulates all findings."""

    def __init__(
        self,
        rules: Optional[Iterable[Rule]] = None,
        root_set: Iterable[str] = DEFAULT_ROOT_SET,
        analyzer: Optional[ReachabilityAnalyzer] = None,
    ) -> None:
        self.rules = list(rules) if rules is not None else discover_rules()
        self.analyzer = analyzer or ReachabilityAnalyzer(root_set=root_set)
        self.logger = get_logger("auditor")

    def run(self, snapshot: ModuleSnapshot) -> AuditReport:
        self.logger.info("Auditing module %s (%d declarations)", snapshot.module, len(snapshot))
        unused = self.analyzer.analyze(snapshot)

        conventions: List[Violation] = []
        for rule in self.rules:
            found = sorted(
                rule.evaluate(snapshot), key=lambda item: (item.identity, item.reason)
            )
            self.logger.debug("Rule %s reported %d violation(s)", rule.name, len(found))
            conventions.extend(found)

        report = AuditReport(
            module=snapshot.module,
            unused=unused,
            conventions=conventions,
            diagnostics=list(snapshot.diagnostics),
        )
        self.logger.info(
            "Audit of %s %s: %d unused declaration(s), %d convention violation(s)",
            snapshot.module,
            "passed" if report.passed else "failed",
            len(unused),
            len(conventions),
        )
        return report

    def run_path(self, path: Path | str) -> AuditReport:
        return self.run(load_snapshot(path))


__all__ = ["AuditFailure", "AuditReport", "Auditor"]
