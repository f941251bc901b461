"""Metadata loader building immutable module snapshots from declaration dumps."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Set, Tuple

import yaml

from .constants import (
    BUILTIN_VALUE_TYPES,
    KIND_CLASS,
    KIND_ENUM,
    MEMBER_KINDS,
    MEMBER_METHOD,
    TYPE_KINDS,
    VISIBILITIES,
    VISIBILITY_PUBLIC,
)
from .logging import get_logger
from .models import Annotation, DeclaredType, LoadDiagnostic, MemberSignature, ModuleSnapshot
from .typerefs import ArrayRef, GenericRef, NamedRef, TypeRef, TypeRefError, parse_type_ref


class SnapshotError(RuntimeError):
    """Raised when a snapshot document is structurally invalid."""


class _MemberError(ValueError):
    """Internal signal that a single member could not be introspected."""


def load_snapshot(path: Path | str) -> ModuleSnapshot:
    """Read a YAML or JSON snapshot document from disk."""
    snapshot_path = Path(path).expanduser()
    try:
        text = snapshot_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SnapshotError(f"Cannot read snapshot {snapshot_path}: {exc}") from exc
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise SnapshotError(f"Failed to parse {snapshot_path.name}: {exc}") from exc
    return MetadataLoader().load(data, source=str(snapshot_path))


def parse_snapshot(data: Any, *, source: str = "<memory>") -> ModuleSnapshot:
    """Build a snapshot from an already-decoded mapping."""
    return MetadataLoader().load(data, source=source)


class MetadataLoader:
    """Turns a decoded snapshot document into a :class:`ModuleSnapshot`.

    Every declared type is kept, public or not. A member whose signature cannot
    be read is skipped with a warning; anything wrong at type level is fatal.
    """

    def __init__(self) -> None:
        self.logger = get_logger("loader")

    def load(self, data: Any, *, source: str = "<memory>") -> ModuleSnapshot:
        if not isinstance(data, Mapping):
            raise SnapshotError(f"{source}: snapshot must contain a mapping at the root")

        module = data.get("module")
        if not isinstance(module, str) or not module.strip():
            raise SnapshotError(f"{source}: snapshot is missing the 'module' name")

        raw_types = data.get("types") or []
        if not isinstance(raw_types, list):
            raise SnapshotError(f"{source}: 'types' must be a list")

        entries = self._index_entries(raw_types, source)
        ordered = sorted(entries)
        enums = {name for name, entry in entries.items() if entry.get("kind") == KIND_ENUM}
        value_types = set(BUILTIN_VALUE_TYPES)
        value_types.update(_as_str_list(data.get("value_types")))
        value_types.update(
            name for name, entry in entries.items() if _as_bool(entry.get("value_type"))
        )
        value_types.update(enums)

        diagnostics: List[LoadDiagnostic] = []
        types: List[DeclaredType] = []
        for type_id, name in enumerate(ordered):
            declared = self._build_type(
                type_id, name, entries[name], value_types, diagnostics, source
            )
            types.append(declared)

        snapshot = ModuleSnapshot(
            module=module.strip(),
            types=tuple(types),
            diagnostics=tuple(diagnostics),
            source=source,
        )
        _check_inheritance(snapshot, source)
        self.logger.debug(
            "Loaded %d declarations from %s (%d members skipped)",
            len(snapshot),
            source,
            len(diagnostics),
        )
        return snapshot

    def _index_entries(self, raw_types: Iterable[Any], source: str) -> Dict[str, Mapping[str, Any]]:
        entries: Dict[str, Mapping[str, Any]] = {}
        for position, entry in enumerate(raw_types):
            if not isinstance(entry, Mapping):
                raise SnapshotError(f"{source}: type entry #{position} is not a mapping")
            name = entry.get("name")
            if not isinstance(name, str) or not name.strip():
                raise SnapshotError(f"{source}: type entry #{position} has no name")
            name = name.strip()
            if name in entries:
                raise SnapshotError(f"{source}: duplicate declaration {name}")
            kind = entry.get("kind", KIND_CLASS)
            if not _is_one_of(kind, TYPE_KINDS):
                raise SnapshotError(f"{source}: {name} has unknown kind {kind!r}")
            visibility = entry.get("visibility", VISIBILITY_PUBLIC)
            if not _is_one_of(visibility, VISIBILITIES):
                raise SnapshotError(f"{source}: {name} has unknown visibility {visibility!r}")
            entries[name] = entry
        return entries

    def _build_type(
        self,
        type_id: int,
        name: str,
        entry: Mapping[str, Any],
        value_types: Set[str],
        diagnostics: List[LoadDiagnostic],
        source: str,
    ) -> DeclaredType:
        try:
            base = _optional_ref(entry.get("base"))
            interfaces = tuple(parse_type_ref(item) for item in _as_list(entry.get("interfaces")))
            annotations = _parse_annotations(entry.get("annotations"))
            raw_members = _as_list(entry.get("members"))
        except (TypeRefError, ValueError) as exc:
            raise SnapshotError(f"{source}: {name}: {exc}") from exc

        kind = entry.get("kind", KIND_CLASS)
        members: List[MemberSignature] = []
        for position, raw_member in enumerate(raw_members):
            try:
                members.append(_build_member(name, raw_member, value_types))
            except _MemberError as exc:
                member_name = _member_label(raw_member, position)
                self.logger.warning("Skipping member %s.%s: %s", name, member_name, exc)
                diagnostics.append(
                    LoadDiagnostic(owner=name, member=member_name, message=str(exc))
                )

        return DeclaredType(
            id=type_id,
            name=name,
            kind=kind,
            visibility=entry.get("visibility", VISIBILITY_PUBLIC),
            namespace=_as_str(entry.get("namespace")) or _namespace_of(name),
            nested=_as_bool(entry.get("nested")) or "+" in name,
            abstract=_as_bool(entry.get("abstract")) or False,
            generic_definition=_as_bool(entry.get("generic_definition")) or "`" in name,
            value_type=kind == KIND_ENUM or bool(_as_bool(entry.get("value_type"))),
            base=base,
            interfaces=interfaces,
            members=tuple(members),
            annotations=annotations,
        )


def _build_member(owner: str, raw: Any, value_types: Set[str]) -> MemberSignature:
    if not isinstance(raw, Mapping):
        raise _MemberError("member entry is not a mapping")
    name = raw.get("name")
    if not isinstance(name, str) or not name.strip():
        raise _MemberError("member has no name")
    if raw.get("error"):
        raise _MemberError(str(raw["error"]))

    kind = raw.get("kind", MEMBER_METHOD)
    if not _is_one_of(kind, MEMBER_KINDS):
        raise _MemberError(f"unknown member kind {kind!r}")
    visibility = raw.get("visibility", VISIBILITY_PUBLIC)
    if not _is_one_of(visibility, VISIBILITIES):
        raise _MemberError(f"unknown visibility {visibility!r}")

    try:
        returns = _optional_ref(raw.get("returns"))
        parameters = tuple(parse_type_ref(item) for item in _as_list(raw.get("parameters")))
        annotations = _parse_annotations(raw.get("annotations"))
    except (TypeRefError, ValueError) as exc:
        raise _MemberError(str(exc)) from exc

    explicit_value_type = _as_bool(raw.get("value_type"))
    if explicit_value_type is None:
        value_type = returns is not None and _is_value_type(returns, value_types)
    else:
        value_type = explicit_value_type

    return MemberSignature(
        owner=owner,
        name=name.strip(),
        kind=kind,
        visibility=visibility,
        returns=returns,
        parameters=parameters,
        annotations=annotations,
        generic_definition=_as_bool(raw.get("generic_definition")) or False,
        value_type=value_type,
    )


def _check_inheritance(snapshot: ModuleSnapshot, source: str) -> None:
    for declared in snapshot:
        chain = [declared.name]
        current: Optional[DeclaredType] = declared
        while current is not None:
            ancestor = snapshot.base_of(current)
            if ancestor is None:
                break
            if ancestor.name in chain:
                cycle = " -> ".join(chain + [ancestor.name])
                raise SnapshotError(f"{source}: inheritance cycle {cycle}")
            chain.append(ancestor.name)
            current = ancestor


def _is_value_type(ref: TypeRef, value_types: Set[str]) -> bool:
    if isinstance(ref, ArrayRef):
        return False
    if isinstance(ref, GenericRef):
        return ref.definition in value_types
    return isinstance(ref, NamedRef) and ref.name in value_types


def _optional_ref(value: Any) -> Optional[TypeRef]:
    if value is None:
        return None
    return parse_type_ref(value)


def _parse_annotations(value: Any) -> Tuple[Annotation, ...]:
    annotations: List[Annotation] = []
    for item in _as_list(value):
        if isinstance(item, str) and item.strip():
            annotations.append(Annotation(kind=item.strip()))
        elif isinstance(item, Mapping) and isinstance(item.get("kind"), str):
            payload = item.get("value")
            annotations.append(
                Annotation(kind=item["kind"].strip(), value=None if payload is None else str(payload))
            )
        else:
            raise ValueError(f"invalid annotation entry {item!r}")
    return tuple(annotations)


def _is_one_of(value: Any, allowed: Iterable[str]) -> bool:
    return isinstance(value, str) and value in allowed


def _namespace_of(name: str) -> str:
    outer = name.split("+", 1)[0]
    return outer.rsplit(".", 1)[0] if "." in outer else ""


def _member_label(raw: Any, position: int) -> str:
    if isinstance(raw, Mapping) and isinstance(raw.get("name"), str) and raw["name"].strip():
        return raw["name"].strip()
    return f"#{position}"


def _as_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    if isinstance(value, (str, Mapping)):
        return [value]
    raise ValueError(f"expected a list but found {type(value).__name__}")


def _as_str(value: Any) -> Optional[str]:
    return value.strip() if isinstance(value, str) and value.strip() else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, list):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = ["MetadataLoader", "SnapshotError", "load_snapshot", "parse_snapshot"]
