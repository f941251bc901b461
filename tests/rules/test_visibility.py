"""Tests for the visibility locality rule."""

from __future__ import annotations

from apiaudit.rules import VisibilityLocalityRule
from tests._fixtures.module_builder import ModuleBuilder


def test_public_type_in_internal_namespace_is_reported(module_builder: ModuleBuilder) -> None:
    module_builder.add("NLog.Internal.StringHelpers")
    module_builder.add("NLog.Internal.Fakeables.IFileSystem", kind="capability")

    violations = VisibilityLocalityRule().evaluate(module_builder.load())

    assert [violation.identity for violation in violations] == [
        "NLog.Internal.Fakeables.IFileSystem",
        "NLog.Internal.StringHelpers",
    ]
    assert "'NLog.Internal.Fakeables'" in violations[0].reason
    assert violations[0].rule == "visibility-locality"


def test_internal_nested_and_allow_listed_types_pass(module_builder: ModuleBuilder) -> None:
    module_builder.add("NLog.Internal.StringHelpers", visibility="internal")
    module_builder.add("NLog.Internal.Outer+Inner")
    module_builder.add("NLog.Internal.Xamarin.PreserveAttribute")
    module_builder.add("NLog.Internal.Fakeables.IAppDomain", kind="capability")

    assert VisibilityLocalityRule().evaluate(module_builder.load()) == []


def test_internal_must_be_a_whole_namespace_segment(module_builder: ModuleBuilder) -> None:
    module_builder.add("NLog.InternalLogging.Writer")
    module_builder.add("NLog.Common.InternalLogger")

    assert VisibilityLocalityRule().evaluate(module_builder.load()) == []
