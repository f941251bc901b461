"""Type reference model and parser for snapshot signatures.

References are written the way metadata dumps print them::

    NLog.LogLevel
    NLog.Targets.Target[]
    System.Collections.Generic.IDictionary`2<System.String, NLog.Layouts.Layout>
    NLog.Config.ConfigurationItemFactory`1

A bare name is a :class:`NamedRef` (this includes open generic definitions,
which carry a backtick arity), a name followed by an argument list is a closed
:class:`GenericRef`, and each trailing ``[]`` (or ``[,]`` for higher ranks)
wraps the reference in an :class:`ArrayRef`.
"""

from __future__ import annotations

from dataclasses import dataclass
import re
from typing import List, Optional, Tuple, Union

_TOKEN_PATTERN = re.compile(r"\s*(?:(?P<name>[^\s<>\[\],]+)|(?P<punct>[<>\[\],]))")


class TypeRefError(ValueError):
    """Raised when a type reference string cannot be parsed."""


@dataclass(frozen=True)
class NamedRef:
    """Reference to a type by its fully-qualified name."""

    name: str


@dataclass(frozen=True)
class ArrayRef:
    """Array of some element reference."""

    element: "TypeRef"
    rank: int = 1


@dataclass(frozen=True)
class GenericRef:
    """Closed generic instantiation: open definition plus ordered arguments."""

    definition: str
    arguments: Tuple["TypeRef", ...]


TypeRef = Union[NamedRef, ArrayRef, GenericRef]


def parse_type_ref(text: str) -> TypeRef:
    """Parse ``text`` into a :data:`TypeRef`, raising :class:`TypeRefError` on bad input."""
    if not isinstance(text, str) or not text.strip():
        raise TypeRefError(f"Empty or non-string type reference: {text!r}")
    parser = _Parser(text, _tokenize(text))
    ref = parser.parse_ref()
    parser.expect_end()
    return ref


def unwrap_arrays(ref: TypeRef) -> TypeRef:
    """Strip array layers until a non-array reference remains."""
    while isinstance(ref, ArrayRef):
        ref = ref.element
    return ref


def definition_name(ref: TypeRef) -> Optional[str]:
    """Return the declared type name a non-array reference points at."""
    if isinstance(ref, NamedRef):
        return ref.name
    if isinstance(ref, GenericRef):
        return ref.definition
    return None


def format_type_ref(ref: TypeRef) -> str:
    if isinstance(ref, NamedRef):
        return ref.name
    if isinstance(ref, ArrayRef):
        return f"{format_type_ref(ref.element)}[{',' * (ref.rank - 1)}]"
    arguments = ", ".join(format_type_ref(arg) for arg in ref.arguments)
    return f"{ref.definition}<{arguments}>"


def _tokenize(text: str) -> List[str]:
    tokens: List[str] = []
    position = 0
    while position < len(text):
        if text[position:].strip() == "":
            break
        match = _TOKEN_PATTERN.match(text, position)
        if match is None:  # pragma: no cover - the pattern accepts every non-space character
            raise TypeRefError(f"Unexpected character at {position} in {text!r}")
        tokens.append(match.group("name") or match.group("punct"))
        position = match.end()
    return tokens


class _Parser:
    def __init__(self, text: str, tokens: List[str]) -> None:
        self._text = text
        self._tokens = tokens
        self._index = 0

    def parse_ref(self) -> TypeRef:
        name = self._next()
        if name in {"<", ">", "[", "]", ","}:
            raise TypeRefError(f"Expected a type name but found {name!r} in {self._text!r}")

        ref: TypeRef
        if self._peek() == "<":
            self._next()
            arguments = [self.parse_ref()]
            while self._peek() == ",":
                self._next()
                arguments.append(self.parse_ref())
            self._expect(">")
            ref = GenericRef(definition=_with_arity(name, len(arguments)), arguments=tuple(arguments))
        else:
            ref = NamedRef(name=name)

        while self._peek() == "[":
            self._next()
            rank = 1
            while self._peek() == ",":
                self._next()
                rank += 1
            self._expect("]")
            ref = ArrayRef(element=ref, rank=rank)
        return ref

    def expect_end(self) -> None:
        if self._index != len(self._tokens):
            raise TypeRefError(
                f"Unexpected trailing token {self._tokens[self._index]!r} in {self._text!r}"
            )

    def _peek(self) -> Optional[str]:
        if self._index < len(self._tokens):
            return self._tokens[self._index]
        return None

    def _next(self) -> str:
        token = self._peek()
        if token is None:
            raise TypeRefError(f"Unexpected end of type reference {self._text!r}")
        self._index += 1
        return token

    def _expect(self, expected: str) -> None:
        token = self._next()
        if token != expected:
            raise TypeRefError(f"Expected {expected!r} but found {token!r} in {self._text!r}")


def _with_arity(name: str, count: int) -> str:
    # Metadata names open generic definitions with a backtick arity suffix.
    if "`" in name:
        return name
    return f"{name}`{count}"


__all__ = [
    "ArrayRef",
    "GenericRef",
    "NamedRef",
    "TypeRef",
    "TypeRefError",
    "definition_name",
    "format_type_ref",
    "parse_type_ref",
    "unwrap_arrays",
]
