from __future__ import annotations

import logging

from elm_sideload.adapters.errors import FileError
from elm_sideload.application.build_cache import bust_build_cache
from elm_sideload.application.config_store import read_config
from elm_sideload.application.diagnostic_catalog import diagnostic
from elm_sideload.domain.changes import OFFICIAL_SOURCE, AppliedChange, ExecutionReport
from elm_sideload.domain.diagnostics import PackageLocation, has_errors
from elm_sideload.domain.environment import Environment, package_slot, resolve_packages_root
from elm_sideload.domain.naming import split_package_name, validate_package_name
from elm_sideload.domain.result import Result
from elm_sideload.ports.filesystem import FileSystemPort

logger = logging.getLogger(__name__)


def unload(env: Environment, fs: FileSystemPort) -> Result[ExecutionReport]:
    """Delete every sideloaded slot so the compiler re-downloads the originals.

    elm.sideload.json is left as is; a later ``install`` re-applies it.
    """
    loaded = read_config(fs, env.config_path)
    if loaded.value is None:
        return Result(diagnostics=loaded.diagnostics)
    config = loaded.value

    root = resolve_packages_root(env, config)
    if root.value is None:
        return Result(diagnostics=root.diagnostics)

    changes: list[AppliedChange] = []
    for sideload in config.sideloads:
        name = sideload.original_package_name
        parts = split_package_name(name)
        if parts is None:
            return Result(diagnostics=validate_package_name(name))
        slot = package_slot(root.value, *parts, sideload.original_package_version)
        try:
            fs.delete_dir(slot)
        except FileError as e:
            return Result(
                diagnostics=[
                    diagnostic(
                        "UNLOAD_FAILED",
                        f"Could not remove {slot}: {e.message}",
                        location=PackageLocation(name, sideload.original_package_version),
                        details={"cause_code": e.code, "restored": [c.package_name for c in changes]},
                    )
                ]
            )
        logger.info("removed %s", slot)
        changes.append(AppliedChange(package_name=name, action="restored", source=OFFICIAL_SOURCE))

    busted = bust_build_cache(env, fs)
    if has_errors(busted):
        return Result(diagnostics=busted)

    return Result(
        value=ExecutionReport(
            message=f"Successfully unloaded {len(changes)} sideloads",
            changes=changes,
        ),
        artifacts=[c.to_json() for c in changes],
    )
