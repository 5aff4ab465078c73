from __future__ import annotations

import logging

from elm_sideload.application.config_store import read_config, write_config
from elm_sideload.application.diagnostic_catalog import diagnostic
from elm_sideload.application.manifest_reader import read_elm_json
from elm_sideload.application.repo_cache import RepositoryCache
from elm_sideload.application.source_resolver import resolve_source
from elm_sideload.domain.changes import ExecutionReport
from elm_sideload.domain.diagnostics import FileLocation, PackageLocation, has_errors
from elm_sideload.domain.environment import Environment
from elm_sideload.domain.naming import is_version, validate_package_name
from elm_sideload.domain.registry import SideloadConfig, SideloadRegistration, upsert
from elm_sideload.domain.result import Result
from elm_sideload.domain.sources import SourceInput
from elm_sideload.ports.filesystem import FileSystemPort

logger = logging.getLogger(__name__)


def _load_or_default(env: Environment, fs: FileSystemPort) -> Result[SideloadConfig]:
    if not fs.exists(env.config_path):
        return Result(value=SideloadConfig())
    return read_config(fs, env.config_path)


def configure(
    env: Environment,
    fs: FileSystemPort,
    cache: RepositoryCache,
    package_name: str,
    source: SourceInput,
) -> Result[ExecutionReport]:
    """Register (or replace) the sideload for ``package_name``.

    The package must already be a dependency in elm.json; its version there
    is captured now and is the slot that ``install`` will overwrite. Nothing
    is written unless every step succeeds.
    """
    diagnostics = validate_package_name(package_name)
    if diagnostics:
        return Result(diagnostics=diagnostics)

    loaded = _load_or_default(env, fs)
    if loaded.value is None:
        return Result(diagnostics=loaded.diagnostics)
    config = loaded.value

    manifest = read_elm_json(fs, env.cwd / config.elm_json_path)
    if manifest.value is None:
        return Result(diagnostics=manifest.diagnostics)
    version = manifest.value.package_version(package_name)
    if version is None:
        return Result(
            diagnostics=[
                diagnostic(
                    "PACKAGE_NOT_FOUND_IN_MANIFEST",
                    f"{package_name} is not a dependency in {config.elm_json_path}",
                    location=PackageLocation(package_name),
                )
            ]
        )
    if not is_version(version):
        return Result(
            diagnostics=[
                diagnostic(
                    "INVALID_MANIFEST",
                    f"{config.elm_json_path} lists {package_name} at {version!r}, which is not a version",
                    location=FileLocation(config.elm_json_path),
                    details={"package": package_name, "version": version},
                )
            ]
        )

    resolved = resolve_source(source, cache)
    if resolved.value is None:
        return Result(diagnostics=resolved.diagnostics)

    registration = SideloadRegistration(
        original_package_name=package_name,
        original_package_version=version,
        sideloaded_package=resolved.value,
    )
    written = write_config(fs, env.config_path, upsert(config, registration))
    if has_errors(written.diagnostics):
        return Result(diagnostics=written.diagnostics)

    logger.info("registered %s %s -> %s", package_name, version, resolved.value.describe())
    return Result(
        value=ExecutionReport(
            message=f"Configured sideload for {package_name} {version} from {resolved.value.describe()}",
            changes=[],
        ),
        artifacts=[registration.to_json()],
    )
