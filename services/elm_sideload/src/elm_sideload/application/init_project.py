from __future__ import annotations

import logging

from elm_sideload.adapters.errors import FileError, FileNotFound
from elm_sideload.application.config_store import write_config
from elm_sideload.application.diagnostic_catalog import diagnostic, from_error
from elm_sideload.domain.changes import ExecutionReport
from elm_sideload.domain.diagnostics import FileLocation, has_errors
from elm_sideload.domain.environment import CACHE_DIRNAME, Environment
from elm_sideload.domain.registry import DEFAULT_ELM_JSON_PATH, SideloadConfig
from elm_sideload.domain.result import Result
from elm_sideload.ports.filesystem import FileSystemPort

logger = logging.getLogger(__name__)


def _gitignore_with_cache(content: str) -> str | None:
    lines = [line.strip().rstrip("/") for line in content.splitlines()]
    if CACHE_DIRNAME in lines:
        return None
    prefix = content if not content or content.endswith("\n") else content + "\n"
    return f"{prefix}{CACHE_DIRNAME}\n"


def init_project(env: Environment, fs: FileSystemPort) -> Result[ExecutionReport]:
    config_path = env.config_path
    if fs.exists(config_path):
        return Result(
            diagnostics=[
                diagnostic(
                    "SIDELOAD_CONFIG_EXISTS",
                    f"{config_path.name} already exists",
                    location=FileLocation(str(config_path)),
                )
            ]
        )
    elm_json = env.cwd / DEFAULT_ELM_JSON_PATH
    if not fs.exists(elm_json):
        return Result(
            diagnostics=[
                diagnostic(
                    "NO_MANIFEST_FOUND",
                    f"No elm.json in {env.cwd}",
                    location=FileLocation(str(elm_json)),
                )
            ]
        )

    written = write_config(fs, config_path, SideloadConfig())
    if has_errors(written.diagnostics):
        return Result(diagnostics=written.diagnostics)

    gitignore = env.cwd / ".gitignore"
    try:
        fs.mkdir(env.cache_root)
        try:
            current = fs.read_file(gitignore)
        except FileNotFound:
            current = ""
        updated = _gitignore_with_cache(current)
        if updated is not None:
            fs.write_file(gitignore, updated)
    except FileError as e:
        return Result(diagnostics=[from_error(e)])

    logger.info("initialised sideload configuration in %s", env.cwd)
    return Result(
        value=ExecutionReport(
            message=f"Created {config_path.name}, the {CACHE_DIRNAME} directory, and updated .gitignore",
            changes=[],
        )
    )
