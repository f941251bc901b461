"""Consistency audit for the public declaration surface of a compiled module."""

from .auditor import AuditFailure, AuditReport, Auditor
from .loader import SnapshotError, load_snapshot, parse_snapshot
from .models import Annotation, DeclaredType, LoadDiagnostic, MemberSignature, ModuleSnapshot, Violation
from .reachability import ReachabilityAnalyzer, RootSetError

__version__ = "0.1.0"

__all__ = [
    "Annotation",
    "AuditFailure",
    "AuditReport",
    "Auditor",
    "DeclaredType",
    "LoadDiagnostic",
    "MemberSignature",
    "ModuleSnapshot",
    "ReachabilityAnalyzer",
    "RootSetError",
    "SnapshotError",
    "Violation",
    "load_snapshot",
    "parse_snapshot",
]
