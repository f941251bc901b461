"""Tests for rule discovery."""

from __future__ import annotations

import logging
from typing import List

import pytest

import apiaudit.rules as rules_module
from apiaudit.models import ModuleSnapshot, Violation
from apiaudit.rules import Rule, discover_rules

BUILTIN_NAMES = [
    "visibility-locality",
    "capability-annotations",
    "required-option-typing",
    "single-default-option",
    "alias-naming",
    "alias-abstractness",
]


class _ExtraRule(Rule):
    name = "extra"
    description = "Plugin rule used in tests."

    def evaluate(self, snapshot: ModuleSnapshot) -> List[Violation]:
        return []


class _FakeEntryPoint:
    def __init__(self, name: str, obj: object) -> None:
        self.name = name
        self._obj = obj
        self.loaded = False

    def load(self) -> object:
        self.loaded = True
        return self._obj


def test_discover_returns_builtins_in_order() -> None:
    assert [rule.name for rule in discover_rules()] == BUILTIN_NAMES


def test_discover_filters_enabled_names_case_insensitively() -> None:
    rules = discover_rules(["Alias-Naming", "visibility-locality"])
    assert [rule.name for rule in rules] == ["visibility-locality", "alias-naming"]


def test_discover_rejects_unknown_names() -> None:
    with pytest.raises(ValueError, match="no-such-rule"):
        discover_rules(["alias-naming", "no-such-rule"])


def test_discover_loads_entry_point_plugins(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        rules_module, "_iter_entry_points", lambda: [_FakeEntryPoint("extra", _ExtraRule)]
    )

    rules = discover_rules()

    assert [rule.name for rule in rules] == BUILTIN_NAMES + ["extra"]


def test_discover_rejects_non_rule_plugins(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        rules_module, "_iter_entry_points", lambda: [_FakeEntryPoint("bogus", object())]
    )

    with pytest.raises(TypeError):
        discover_rules()


def test_discover_skips_plugins_shadowing_registered_names(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    shadow = _FakeEntryPoint("Alias-Naming", _ExtraRule)
    monkeypatch.setattr(rules_module, "_iter_entry_points", lambda: [shadow])

    with caplog.at_level(logging.WARNING, logger="apiaudit.rules"):
        rules = discover_rules()

    assert [rule.name for rule in rules] == BUILTIN_NAMES
    assert not shadow.loaded
    assert "Ignoring rule plugin 'Alias-Naming'" in caplog.text


def test_discover_only_imports_selected_plugins(monkeypatch: pytest.MonkeyPatch) -> None:
    extra = _FakeEntryPoint("extra", _ExtraRule)
    monkeypatch.setattr(rules_module, "_iter_entry_points", lambda: [extra])

    rules = discover_rules(["alias-naming"])

    assert [rule.name for rule in rules] == ["alias-naming"]
    assert not extra.loaded
