"""FastAPI application entrypoint for apiaudit service mode."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Dict, List, Optional, Sequence

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..auditor import Auditor, AuditReport
from ..loader import SnapshotError, parse_snapshot
from ..reachability import RootSetError
from ..rules import discover_rules


class AuditRequest(BaseModel):
    snapshot: Dict[str, Any]
    rules: Optional[List[str]] = None


class ViolationModel(BaseModel):
    identity: str
    reason: str
    rule: str


class DiagnosticModel(BaseModel):
    owner: str
    member: str
    message: str


class AuditResponse(BaseModel):
    module: str
    passed: bool
    unused: List[ViolationModel]
    conventions: List[ViolationModel]
    diagnostics: List[DiagnosticModel]


class RuleInfo(BaseModel):
    name: str
    description: str


class HealthResponse(BaseModel):
    status: str


def _default_auditor(rules: Optional[Sequence[str]]) -> Auditor:
    return Auditor(rules=discover_rules(rules))


def create_app(
    auditor_factory: Callable[[Optional[Sequence[str]]], Auditor] = _default_auditor,
) -> FastAPI:
    """Create the FastAPI application exposing audit operations."""

    app = FastAPI(title="API Audit Service", version="1.0.0")

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.get("/rules", response_model=List[RuleInfo])
    async def list_rules() -> List[RuleInfo]:
        return [RuleInfo(name=rule.name, description=rule.description) for rule in discover_rules()]

    @app.post("/audit", response_model=AuditResponse)
    async def audit(payload: AuditRequest) -> AuditResponse:
        def _run_audit() -> AuditReport:
            # Fresh auditor and snapshot per request; nothing is shared between runs.
            snapshot = parse_snapshot(payload.snapshot, source="request")
            return auditor_factory(payload.rules).run(snapshot)

        loop = asyncio.get_running_loop()
        report = await loop.run_in_executor(None, _run_audit)
        return AuditResponse(**report.to_dict())

    @app.exception_handler(SnapshotError)
    async def snapshot_error_handler(_: Any, exc: SnapshotError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    @app.exception_handler(RootSetError)
    async def root_set_error_handler(_: Any, exc: RootSetError) -> JSONResponse:
        return JSONResponse(status_code=500, content={"detail": str(exc)})

    @app.exception_handler(ValueError)
    async def value_error_handler(_: Any, exc: ValueError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(host: str = "127.0.0.1", port: int = 8000) -> None:  # pragma: no cover - integration path
    import uvicorn

    app = create_app()
    uvicorn.run(app, host=host, port=port)
