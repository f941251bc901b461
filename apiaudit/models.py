"""Core data models shared across apiaudit components."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Set, Tuple

from .constants import KIND_CAPABILITY, KIND_ENUM, VISIBILITY_PUBLIC
from .typerefs import TypeRef, definition_name


@dataclass(frozen=True)
class Annotation:
    """Tag attached to a declaration or member, with an optional payload."""

    kind: str
    value: Optional[str] = None


@dataclass(frozen=True)
class MemberSignature:
    """Signature of a single declared member."""

    owner: str
    name: str
    kind: str
    visibility: str = VISIBILITY_PUBLIC
    returns: Optional[TypeRef] = None
    parameters: Tuple[TypeRef, ...] = ()
    annotations: Tuple[Annotation, ...] = ()
    generic_definition: bool = False
    value_type: bool = False

    @property
    def is_public(self) -> bool:
        return self.visibility == VISIBILITY_PUBLIC

    def has_annotation(self, kind: str) -> bool:
        return any(annotation.kind == kind for annotation in self.annotations)


@dataclass(frozen=True)
class DeclaredType:
    """A class, capability or enum declared by the audited module."""

    id: int
    name: str
    kind: str
    visibility: str
    namespace: str
    nested: bool = False
    abstract: bool = False
    generic_definition: bool = False
    value_type: bool = False
    base: Optional[TypeRef] = None
    interfaces: Tuple[TypeRef, ...] = ()
    members: Tuple[MemberSignature, ...] = ()
    annotations: Tuple[Annotation, ...] = ()

    @property
    def is_public(self) -> bool:
        return self.visibility == VISIBILITY_PUBLIC

    @property
    def is_capability(self) -> bool:
        return self.kind == KIND_CAPABILITY

    @property
    def is_enum(self) -> bool:
        return self.kind == KIND_ENUM

    @property
    def short_name(self) -> str:
        """Name without namespace or enclosing types."""
        return self.name.rsplit("+", 1)[-1].rsplit(".", 1)[-1]

    def annotations_of(self, kind: str) -> List[Annotation]:
        return [annotation for annotation in self.annotations if annotation.kind == kind]

    def has_annotation(self, kind: str) -> bool:
        return any(annotation.kind == kind for annotation in self.annotations)


@dataclass(frozen=True)
class LoadDiagnostic:
    """Non-fatal problem recorded while loading a snapshot."""

    owner: str
    member: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {"owner": self.owner, "member": self.member, "message": self.message}


@dataclass(frozen=True)
class Violation:
    """Single audit finding against a declaration or member."""

    identity: str
    reason: str
    rule: str

    def to_dict(self) -> Dict[str, str]:
        return {"identity": self.identity, "reason": self.reason, "rule": self.rule}


@dataclass(frozen=True)
class ModuleSnapshot:
    """Immutable view of every declaration in one audited module.

    ``types`` is ordered by full name and each entry's ``id`` equals its
    position, so per-declaration state can live in flat indexed arrays.
    """

    module: str
    types: Tuple[DeclaredType, ...]
    diagnostics: Tuple[LoadDiagnostic, ...] = ()
    source: str = "<memory>"
    _index: Dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        index: Dict[str, int] = {}
        for position, declared in enumerate(self.types):
            if declared.id != position:
                raise ValueError(
                    f"Declaration {declared.name} has id {declared.id} at position {position}"
                )
            index[declared.name] = position
        object.__setattr__(self, "_index", index)

    def __len__(self) -> int:
        return len(self.types)

    def __iter__(self) -> Iterator[DeclaredType]:
        return iter(self.types)

    def get(self, name: str) -> Optional[DeclaredType]:
        position = self._index.get(name)
        return self.types[position] if position is not None else None

    def id_of(self, name: str) -> Optional[int]:
        return self._index.get(name)

    def is_module_owned(self, name: str) -> bool:
        return name in self._index

    def base_of(self, declared: DeclaredType) -> Optional[DeclaredType]:
        if declared.base is None:
            return None
        base_name = definition_name(declared.base)
        return self.get(base_name) if base_name else None

    def base_names(self, declared: DeclaredType) -> Iterator[str]:
        """Yield base type names from the immediate base up the module-owned chain."""
        seen: Set[str] = {declared.name}
        current: Optional[DeclaredType] = declared
        while current is not None and current.base is not None:
            base_name = definition_name(current.base)
            if base_name is None or base_name in seen:
                return
            seen.add(base_name)
            yield base_name
            current = self.get(base_name)

    def is_subclass_of(self, declared: DeclaredType, base_name: str) -> bool:
        """Return True when ``base_name`` is a strict ancestor of ``declared``."""
        return any(name == base_name for name in self.base_names(declared))

    def implements(self, declared: DeclaredType, capability: str) -> bool:
        """Return True when ``declared`` implements ``capability`` directly or by inheritance."""
        pending: List[DeclaredType] = [declared]
        pending.extend(
            ancestor
            for ancestor in (self.get(name) for name in self.base_names(declared))
            if ancestor is not None
        )
        seen: Set[str] = set()
        while pending:
            current = pending.pop()
            if current.name in seen:
                continue
            seen.add(current.name)
            for ref in current.interfaces:
                name = definition_name(ref)
                if name is None:
                    continue
                if name == capability:
                    return True
                inherited = self.get(name)
                if inherited is not None:
                    pending.append(inherited)
        return False

    def has_annotation(self, declared: DeclaredType, kind: str, *, inherit: bool = False) -> bool:
        """Look up a type-level annotation, optionally through module-owned base types."""
        if declared.has_annotation(kind):
            return True
        if not inherit:
            return False
        for name in self.base_names(declared):
            ancestor = self.get(name)
            if ancestor is not None and ancestor.has_annotation(kind):
                return True
        return False


__all__ = [
    "Annotation",
    "DeclaredType",
    "LoadDiagnostic",
    "MemberSignature",
    "ModuleSnapshot",
    "Violation",
]
