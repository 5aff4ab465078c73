from __future__ import annotations

import json
from pathlib import Path

from elm_sideload.adapters.errors import FileError
from elm_sideload.application.diagnostic_catalog import diagnostic, from_error
from elm_sideload.domain.diagnostics import FileLocation
from elm_sideload.domain.manifest import ElmJson
from elm_sideload.domain.result import Result
from elm_sideload.ports.filesystem import FileSystemPort


def read_elm_json(fs: FileSystemPort, path: Path) -> Result[ElmJson]:
    location = FileLocation(str(path))
    if not fs.exists(path):
        return Result(
            diagnostics=[diagnostic("NO_MANIFEST_FOUND", f"elm.json not found at {path}", location=location)]
        )
    try:
        raw: object = json.loads(fs.read_file(path))
    except FileError as e:
        return Result(diagnostics=[from_error(e, location=location)])
    except json.JSONDecodeError as e:
        return Result(
            diagnostics=[diagnostic("INVALID_MANIFEST", f"Could not parse {path}: {e}", location=location)]
        )
    if not isinstance(raw, dict):
        return Result(
            diagnostics=[diagnostic("INVALID_MANIFEST", f"{path} is not a JSON object", location=location)]
        )
    return Result(value=ElmJson.from_json(raw))
