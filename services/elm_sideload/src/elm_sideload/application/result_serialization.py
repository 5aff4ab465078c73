from __future__ import annotations

from dataclasses import asdict, is_dataclass
from datetime import datetime, timezone
from typing import Any, TypeVar

from elm_sideload.domain.diagnostics import Diagnostic, Location
from elm_sideload.domain.result import Result

T = TypeVar("T")


def _serialize_location(location: Location | None) -> dict[str, Any] | None:
    if location is None:
        return None
    if is_dataclass(location):
        return asdict(location)
    return {"kind": str(getattr(location, "kind", "unknown"))}


def serialize_diagnostic(diag: Diagnostic) -> dict[str, Any]:
    return {
        "id": diag.id,
        "code": diag.code,
        "rule": diag.rule,
        "severity": diag.severity.value,
        "message": diag.message,
        "hint": diag.hint,
        "details": diag.details,
        "location": _serialize_location(diag.location),
    }


def serialize_result(
    result: Result[T],
    command: str,
    args: list[str],
) -> dict[str, Any]:
    message = getattr(result.value, "message", None)
    return {
        "result_schema_version": 1,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "command": command,
        "args": args,
        "exit_code": result.exit_code,
        "message": message,
        "diagnostics": [serialize_diagnostic(d) for d in result.diagnostics],
        "artifacts": result.artifacts,
    }
