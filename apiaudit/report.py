"""Text and JSON rendering for audit reports."""

from __future__ import annotations

import json
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from .auditor import AuditReport

_TEMPLATES_DIR = Path(__file__).with_name("templates")


def _create_env() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(_TEMPLATES_DIR)),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def render_text(report: AuditReport) -> str:
    template = _create_env().get_template("report.txt.j2")
    return template.render(report=report)


def render_json(report: AuditReport) -> str:
    return json.dumps(report.to_dict(), indent=2, sort_keys=True) + "\n"


def render(report: AuditReport, fmt: str = "text") -> str:
    if fmt == "json":
        return render_json(report)
    if fmt == "text":
        return render_text(report)
    raise ValueError(f"Unsupported report format: {fmt}")


__all__ = ["render", "render_json", "render_text"]
