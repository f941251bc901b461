"""Tests for type reference parsing."""

from __future__ import annotations

import pytest

from apiaudit.typerefs import (
    ArrayRef,
    GenericRef,
    NamedRef,
    TypeRefError,
    definition_name,
    format_type_ref,
    parse_type_ref,
    unwrap_arrays,
)


def test_parse_plain_name() -> None:
    assert parse_type_ref("NLog.LogLevel") == NamedRef("NLog.LogLevel")


def test_parse_open_generic_definition_stays_named() -> None:
    ref = parse_type_ref("NLog.Config.Factory`1")
    assert ref == NamedRef("NLog.Config.Factory`1")


def test_parse_arrays_including_jagged_and_multi_rank() -> None:
    assert parse_type_ref("NLog.Foo[]") == ArrayRef(NamedRef("NLog.Foo"))
    assert parse_type_ref("NLog.Foo[,]") == ArrayRef(NamedRef("NLog.Foo"), rank=2)
    assert parse_type_ref("NLog.Foo[][]") == ArrayRef(ArrayRef(NamedRef("NLog.Foo")))


def test_parse_closed_generic_appends_arity_when_missing() -> None:
    ref = parse_type_ref("System.Collections.Generic.IDictionary<System.String, NLog.Layouts.Layout[]>")
    assert ref == GenericRef(
        definition="System.Collections.Generic.IDictionary`2",
        arguments=(NamedRef("System.String"), ArrayRef(NamedRef("NLog.Layouts.Layout"))),
    )


def test_parse_closed_generic_keeps_explicit_arity() -> None:
    ref = parse_type_ref("System.Nullable`1<NLog.LogLevel>")
    assert isinstance(ref, GenericRef)
    assert ref.definition == "System.Nullable`1"


def test_parse_nested_generic_array() -> None:
    ref = parse_type_ref("System.Collections.Generic.List<NLog.Box<NLog.Item>>[]")
    inner = unwrap_arrays(ref)
    assert isinstance(inner, GenericRef)
    assert inner.arguments == (GenericRef("NLog.Box`1", (NamedRef("NLog.Item"),)),)


@pytest.mark.parametrize(
    "text",
    ["", "   ", "NLog.Foo<", "NLog.Foo>", "NLog.Foo<NLog.Bar", "NLog.Foo[", "NLog.Foo NLog.Bar", "<NLog.Foo>"],
)
def test_parse_rejects_malformed_references(text: str) -> None:
    with pytest.raises(TypeRefError):
        parse_type_ref(text)


def test_definition_name_and_format() -> None:
    ref = parse_type_ref("System.Collections.Generic.List`1<NLog.Foo[,]>")
    assert definition_name(ref) == "System.Collections.Generic.List`1"
    assert definition_name(ArrayRef(NamedRef("NLog.Foo"))) is None
    assert format_type_ref(ref) == "System.Collections.Generic.List`1<NLog.Foo[,]>"
