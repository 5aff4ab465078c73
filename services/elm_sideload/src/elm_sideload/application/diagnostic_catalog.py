from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

from elm_sideload.adapters.errors import AdapterError
from elm_sideload.domain.diagnostics import Diagnostic, Location, Severity

CATALOG_PATH = Path(__file__).resolve().parents[1] / "diagnostics" / "codes.yaml"


@dataclass(frozen=True)
class CodeEntry:
    code: str
    severity: Severity
    rule: str
    message: str
    hint: str | None


@lru_cache(maxsize=1)
def load_catalog(path: Path = CATALOG_PATH) -> dict[str, CodeEntry]:
    raw: object = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict) or raw.get("version") != 1:
        raise RuntimeError(f"Unsupported diagnostics catalog: {path}")
    entries: dict[str, CodeEntry] = {}
    for item in raw.get("codes") or []:
        if not isinstance(item, dict):
            continue
        code = str(item["code"])
        entries[code] = CodeEntry(
            code=code,
            severity=Severity(str(item["severity"])),
            rule=str(item["rule"]),
            message=str(item.get("message") or "").strip(),
            hint=str(item["hint"]).strip() if item.get("hint") else None,
        )
    return entries


def diagnostic(
    code: str,
    message: str | None = None,
    *,
    location: Location | None = None,
    details: dict[str, Any] | None = None,
    hint: str | None = None,
) -> Diagnostic:
    """Build a diagnostic whose rule, severity and default hint come from the catalog."""
    entry = load_catalog()[code]
    return Diagnostic(
        code=code,
        rule=entry.rule,
        severity=entry.severity,
        message=message or entry.message,
        location=location,
        hint=hint or entry.hint,
        details=details,
    )


def from_error(error: AdapterError, *, location: Location | None = None) -> Diagnostic:
    return diagnostic(
        error.code,
        error.message,
        location=location,
        details=error.details,
        hint=error.hint,
    )
