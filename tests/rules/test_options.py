"""Tests for required-option and default-option rules."""

from __future__ import annotations

from apiaudit.rules import RequiredOptionTypingRule, SingleDefaultOptionRule
from tests._fixtures.module_builder import RENDERING_BASE, ModuleBuilder


def test_required_option_with_value_type_is_reported(module_builder: ModuleBuilder) -> None:
    module_builder.add(
        "NLog.Targets.NetworkTarget",
        members=[
            {"name": "Address", "kind": "property", "returns": "NLog.Layouts.Layout", "annotations": ["required-option"]},
            {"name": "Port", "kind": "property", "returns": "System.Int32", "annotations": ["required-option"]},
            {"name": "Timeout", "kind": "property", "returns": "System.Int32"},
        ],
    )

    violations = RequiredOptionTypingRule().evaluate(module_builder.load())

    assert [violation.identity for violation in violations] == ["NLog.Targets.NetworkTarget.Port"]
    assert "System.Int32" in violations[0].reason


def test_required_option_on_module_enum_is_reported(module_builder: ModuleBuilder) -> None:
    module_builder.add("NLog.Targets.LineEndingMode", kind="enum")
    module_builder.add(
        "NLog.Targets.FileTarget",
        members=[
            {
                "name": "LineEnding",
                "kind": "property",
                "visibility": "internal",
                "returns": "NLog.Targets.LineEndingMode",
                "annotations": ["required-option"],
            }
        ],
    )

    violations = RequiredOptionTypingRule().evaluate(module_builder.load())

    assert [violation.identity for violation in violations] == ["NLog.Targets.FileTarget.LineEnding"]


def test_two_default_options_report_first_member(module_builder: ModuleBuilder) -> None:
    module_builder.rendering_family()
    module_builder.add(
        "NLog.LayoutRenderers.EventPropertiesLayoutRenderer",
        base=RENDERING_BASE,
        members=[
            {"name": "Item", "kind": "property", "returns": "System.String", "annotations": ["default-option"]},
            {"name": "Format", "kind": "property", "returns": "System.String", "annotations": ["default-option"]},
            {"name": "Culture", "kind": "property", "returns": "System.String", "annotations": ["default-option"]},
        ],
    )

    violations = SingleDefaultOptionRule().evaluate(module_builder.load())

    assert len(violations) == 1
    assert violations[0].identity == "NLog.LayoutRenderers.EventPropertiesLayoutRenderer.Item"
    assert violations[0].reason.startswith("'Item' is already the default-option member")


def test_single_default_option_on_renderer_passes(module_builder: ModuleBuilder) -> None:
    module_builder.rendering_family()
    module_builder.add(
        "NLog.LayoutRenderers.LevelLayoutRenderer",
        base=RENDERING_BASE,
        members=[{"name": "Format", "kind": "property", "returns": "System.String", "annotations": ["default-option"]}],
    )

    assert SingleDefaultOptionRule().evaluate(module_builder.load()) == []


def test_default_option_outside_rendering_family_reports_type(module_builder: ModuleBuilder) -> None:
    module_builder.rendering_family()
    module_builder.add(
        "NLog.Targets.FileTarget",
        members=[{"name": "FileName", "kind": "property", "returns": "System.String", "annotations": ["default-option"]}],
    )

    violations = SingleDefaultOptionRule().evaluate(module_builder.load())

    assert [violation.identity for violation in violations] == ["NLog.Targets.FileTarget"]
    assert RENDERING_BASE in violations[0].reason
