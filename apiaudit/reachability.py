"""Detection of public enums and capabilities nothing in the module refers to."""

from __future__ import annotations

from typing import Iterable, List, Optional

from .constants import DEFAULT_ROOT_SET
from .graph import UsageGraph, UsageGraphBuilder
from .logging import get_logger
from .models import DeclaredType, ModuleSnapshot, Violation


class RootSetError(RuntimeError):
    """Raised when the root set names a declaration the module does not have."""


class ReachabilityAnalyzer:
    """Reports tracked declarations whose usage counter stays at zero."""

    name = "unused-declarations"

    def __init__(
        self,
        root_set: Iterable[str] = DEFAULT_ROOT_SET,
        builder: Optional[UsageGraphBuilder] = None,
    ) -> None:
        self.root_set = frozenset(root_set)
        self.builder = builder or UsageGraphBuilder()
        self.logger = get_logger("reachability")

    def tracked(self, snapshot: ModuleSnapshot) -> List[DeclaredType]:
        return [
            declared
            for declared in snapshot
            if declared.is_public and (declared.is_enum or declared.is_capability)
        ]

    def build_graph(self, snapshot: ModuleSnapshot) -> UsageGraph:
        """Seed the root set, count references and freeze the result."""
        graph = UsageGraph(snapshot)
        for name in sorted(self.root_set):
            type_id = snapshot.id_of(name)
            if type_id is None:
                raise RootSetError(
                    f"Root set entry {name} is not declared in module {snapshot.module}"
                )
            graph.seed(type_id)
        self.builder.build(snapshot, graph)
        graph.freeze()
        return graph

    def find_unused(self, snapshot: ModuleSnapshot, graph: UsageGraph) -> List[Violation]:
        unused = [declared for declared in self.tracked(snapshot) if graph.count_of(declared) == 0]
        unused.sort(key=lambda declared: declared.name)
        return [
            Violation(
                identity=declared.name,
                reason=(
                    f"{declared.kind} '{declared.name}' is not referenced by any base type, "
                    f"capability list, member signature or generic argument in module "
                    f"'{snapshot.module}'"
                ),
                rule=self.name,
            )
            for declared in unused
        ]

    def analyze(self, snapshot: ModuleSnapshot) -> List[Violation]:
        graph = self.build_graph(snapshot)
        violations = self.find_unused(snapshot, graph)
        self.logger.debug(
            "%d tracked declarations, %d unreferenced",
            len(self.tracked(snapshot)),
            len(violations),
        )
        return violations


__all__ = ["ReachabilityAnalyzer", "RootSetError"]
