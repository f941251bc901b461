"""Tests for the FastAPI service mode."""

from __future__ import annotations

from typing import Any, Dict

import pytest
from fastapi.testclient import TestClient

from apiaudit.service import create_app


def _snapshot(*extra: Dict[str, Any]) -> Dict[str, Any]:
    types = [
        {"name": "NLog.Config.IInstallable", "kind": "capability"},
        {"name": "NLog.LogLevel", "kind": "enum"},
        {"name": "NLog.Logger", "members": [{"name": "Level", "returns": "NLog.LogLevel"}]},
    ]
    types.extend(extra)
    return {"module": "NLog", "types": types}


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_app())


def test_health_endpoint(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_rules_endpoint(client: TestClient) -> None:
    response = client.get("/rules")
    assert response.status_code == 200
    assert "alias-naming" in [rule["name"] for rule in response.json()]


def test_audit_endpoint_reports_violations(client: TestClient) -> None:
    response = client.post(
        "/audit",
        json={"snapshot": _snapshot({"name": "NLog.IUnused", "kind": "capability"})},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["passed"] is False
    assert [item["identity"] for item in data["unused"]] == ["NLog.IUnused"]
    assert data["conventions"] == []


def test_audit_endpoint_honours_rule_selection(client: TestClient) -> None:
    response = client.post(
        "/audit",
        json={"snapshot": _snapshot({"name": "NLog.Internal.Leaky"}), "rules": ["alias-naming"]},
    )

    assert response.status_code == 200
    assert response.json()["passed"] is True


def test_audit_endpoint_maps_errors(client: TestClient) -> None:
    bad_snapshot = client.post("/audit", json={"snapshot": {"types": []}})
    assert bad_snapshot.status_code == 422

    missing_root = client.post(
        "/audit", json={"snapshot": {"module": "NLog", "types": [{"name": "NLog.A"}]}}
    )
    assert missing_root.status_code == 500

    unknown_rule = client.post("/audit", json={"snapshot": _snapshot(), "rules": ["nope"]})
    assert unknown_rule.status_code == 400
