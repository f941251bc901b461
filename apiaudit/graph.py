"""Usage counter table over a module snapshot."""

from __future__ import annotations

from typing import Dict, List, Optional

from .logging import get_logger
from .models import DeclaredType, ModuleSnapshot
from .typerefs import GenericRef, TypeRef, unwrap_arrays


class UsageGraph:
    """Flat reference counter per declaration id.

    Only zero-vs-nonzero matters downstream, so no edges are kept.
    """

    def __init__(self, snapshot: ModuleSnapshot) -> None:
        self._snapshot = snapshot
        self._counts: List[int] = [0] * len(snapshot)
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def increment(self, type_id: int) -> None:
        self._ensure_mutable()
        self._counts[type_id] += 1

    def seed(self, type_id: int) -> None:
        """Guarantee a counter of at least one for ``type_id``."""
        self._ensure_mutable()
        if self._counts[type_id] < 1:
            self._counts[type_id] = 1

    def freeze(self) -> None:
        self._frozen = True

    def count(self, name: str) -> int:
        type_id = self._snapshot.id_of(name)
        if type_id is None:
            raise KeyError(f"{name} is not declared in module {self._snapshot.module}")
        return self._counts[type_id]

    def count_of(self, declared: DeclaredType) -> int:
        return self._counts[declared.id]

    def counts(self) -> Dict[str, int]:
        return {declared.name: self._counts[declared.id] for declared in self._snapshot}

    def _ensure_mutable(self) -> None:
        if self._frozen:
            raise RuntimeError("Usage graph is frozen; build a new one for another run")


class UsageGraphBuilder:
    """Records references from each declaration's structure to module-owned types."""

    def __init__(self) -> None:
        self.logger = get_logger("graph")

    def build(self, snapshot: ModuleSnapshot, graph: Optional[UsageGraph] = None) -> UsageGraph:
        graph = graph if graph is not None else UsageGraph(snapshot)
        sources = 0
        for declared in snapshot:
            # Open definitions are only ever targets; their unbound signatures reference nothing.
            if declared.generic_definition:
                continue
            sources += 1
            if declared.base is not None:
                self._record(snapshot, graph, declared.base)
            for capability in declared.interfaces:
                self._record(snapshot, graph, capability)
            for member in declared.members:
                if not member.is_public or member.generic_definition:
                    continue
                if member.returns is not None:
                    self._record(snapshot, graph, member.returns)
                for parameter in member.parameters:
                    self._record(snapshot, graph, parameter)
        self.logger.debug("Usage graph built from %d of %d declarations", sources, len(snapshot))
        return graph

    def _record(self, snapshot: ModuleSnapshot, graph: UsageGraph, ref: TypeRef) -> None:
        ref = unwrap_arrays(ref)
        if isinstance(ref, GenericRef):
            self._record_name(snapshot, graph, ref.definition)
            for argument in ref.arguments:
                self._record(snapshot, graph, argument)
            return
        self._record_name(snapshot, graph, ref.name)

    @staticmethod
    def _record_name(snapshot: ModuleSnapshot, graph: UsageGraph, name: str) -> None:
        type_id = snapshot.id_of(name)
        if type_id is not None:
            graph.increment(type_id)


__all__ = ["UsageGraph", "UsageGraphBuilder"]
