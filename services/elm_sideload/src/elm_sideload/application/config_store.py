from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, cast

import jsonschema

from elm_sideload.adapters.errors import FileError
from elm_sideload.application.diagnostic_catalog import diagnostic, from_error
from elm_sideload.domain.diagnostics import Diagnostic, FileLocation
from elm_sideload.domain.registry import SideloadConfig
from elm_sideload.domain.result import Result
from elm_sideload.ports.filesystem import FileSystemPort

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[1] / "schemas" / "sideload.schema.v1.json"


@lru_cache(maxsize=1)
def load_schema() -> dict[str, Any]:
    return json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))


def validate_config_document(raw: object, path: Path) -> list[Diagnostic]:
    try:
        jsonschema.validate(raw, load_schema())
        return []
    except jsonschema.ValidationError as e:
        where = "/".join(str(p) for p in e.absolute_path) or "<root>"
        return [
            diagnostic(
                "INVALID_SIDELOAD_CONFIG",
                f"{path.name}: {where}: {e.message}",
                location=FileLocation(str(path)),
            )
        ]


def read_config(fs: FileSystemPort, path: Path) -> Result[SideloadConfig]:
    if not fs.exists(path):
        return Result(
            diagnostics=[
                diagnostic(
                    "NO_SIDELOAD_CONFIG_FOUND",
                    f"{path.name} not found in {path.parent}",
                    location=FileLocation(str(path)),
                )
            ]
        )
    try:
        content = fs.read_file(path)
    except FileError as e:
        return Result(diagnostics=[from_error(e, location=FileLocation(str(path)))])
    try:
        raw: object = json.loads(content)
    except json.JSONDecodeError as e:
        return Result(
            diagnostics=[
                diagnostic(
                    "INVALID_SIDELOAD_CONFIG",
                    f"{path.name} is not valid JSON: {e}",
                    location=FileLocation(str(path)),
                )
            ]
        )
    diagnostics = validate_config_document(raw, path)
    if diagnostics:
        return Result(diagnostics=diagnostics)
    config = SideloadConfig.from_json(cast(dict[str, Any], raw))
    logger.debug("loaded %d sideload(s) from %s", len(config.sideloads), path)
    return Result(value=config)


def dumps_config(config: SideloadConfig) -> str:
    return json.dumps(config.to_json(), indent=2) + "\n"


def write_config(fs: FileSystemPort, path: Path, config: SideloadConfig) -> Result[None]:
    try:
        fs.write_file(path, dumps_config(config))
    except FileError as e:
        return Result(diagnostics=[from_error(e, location=FileLocation(str(path)))])
    logger.debug("wrote %s", path)
    return Result()
