from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
from pathlib import Path
from typing import assert_never

from elm_sideload.adapters.errors import AdapterError, FileError, FileNotFound, GitError
from elm_sideload.application.build_cache import bust_build_cache
from elm_sideload.application.config_store import read_config
from elm_sideload.application.diagnostic_catalog import diagnostic, from_error
from elm_sideload.application.repo_cache import RepositoryCache
from elm_sideload.domain.changes import AppliedChange, ExecutionReport
from elm_sideload.domain.commands import InstallMode
from elm_sideload.domain.diagnostics import (
    Diagnostic,
    FileLocation,
    PackageLocation,
    has_errors,
)
from elm_sideload.domain.environment import (
    ARTIFACT_FILENAMES,
    MARKER_FILENAME,
    VCS_METADATA_DIRS,
    Environment,
    package_slot,
    resolve_packages_root,
)
from elm_sideload.domain.naming import validate_package_name
from elm_sideload.domain.registry import SideloadConfig, SideloadRegistration
from elm_sideload.domain.result import Result
from elm_sideload.domain.sources import GithubSource, RelativeSource
from elm_sideload.ports.filesystem import FileSystemPort
from elm_sideload.ports.user_io import PromptPort
from elm_sideload.ports.workspace import WorkspacePort

logger = logging.getLogger(__name__)

AFFIRMATIVE_ANSWERS = {"y", "yes"}


class InstallState(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating-preconditions"
    ACQUIRING = "acquiring-sources"
    APPLYING = "applying-overrides"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class Preconditions:
    config: SideloadConfig
    packages_root: Path


@dataclass(frozen=True)
class AcquiredSource:
    registration: SideloadRegistration
    directory: Path


def _planned_changes(config: SideloadConfig) -> list[AppliedChange]:
    return [
        AppliedChange(
            package_name=s.original_package_name,
            action="sideloaded",
            source=s.sideloaded_package.describe(),
        )
        for s in config.sideloads
    ]


class Installer:
    """Applies every registered sideload to ELM_HOME, or none of them.

    All sources are acquired before anything in ELM_HOME is touched, so a
    clone or lookup failure for one package leaves every slot as it was.
    """

    def __init__(
        self,
        env: Environment,
        fs: FileSystemPort,
        cache: RepositoryCache,
        workspace: WorkspacePort,
        prompt: PromptPort | None = None,
    ) -> None:
        self.env = env
        self.fs = fs
        self.cache = cache
        self.workspace = workspace
        self.prompt = prompt
        self.state = InstallState.IDLE

    def _transition(self, state: InstallState) -> None:
        logger.debug("install: %s -> %s", self.state.value, state.value)
        self.state = state

    def _fail(self, diagnostics: list[Diagnostic]) -> Result[ExecutionReport]:
        self._transition(InstallState.FAILED)
        return Result(diagnostics=diagnostics)

    def validate(self) -> Result[Preconditions]:
        loaded = read_config(self.fs, self.env.config_path)
        if loaded.value is None:
            return Result(diagnostics=loaded.diagnostics)
        config = loaded.value

        elm_json = self.env.cwd / config.elm_json_path
        if not self.fs.exists(elm_json):
            return Result(
                diagnostics=[
                    diagnostic(
                        "NO_MANIFEST_FOUND",
                        f"{config.elm_json_path} not found in {self.env.cwd}",
                        location=FileLocation(str(elm_json)),
                    )
                ]
            )

        diagnostics: list[Diagnostic] = []
        for sideload in config.sideloads:
            diagnostics.extend(validate_package_name(sideload.original_package_name))
        if diagnostics:
            return Result(diagnostics=diagnostics)

        root = resolve_packages_root(self.env, config)
        if root.value is None:
            return Result(diagnostics=root.diagnostics)
        return Result(
            value=Preconditions(config=config, packages_root=root.value),
            diagnostics=[
                diagnostic(
                    "ELM_HOME_RESOLVED",
                    f"Packages directory: {root.value}",
                    details={"packages_root": str(root.value)},
                )
            ],
        )

    def _confirm(self, pre: Preconditions) -> bool:
        if self.prompt is None:
            return False
        lines = [f"About to overwrite packages in {pre.packages_root}:"]
        for s in pre.config.sideloads:
            lines.append(
                f"  {s.original_package_name} {s.original_package_version}"
                f" <- {s.sideloaded_package.describe()}"
            )
        lines.append("Continue? [y/N]")
        answer = self.prompt.prompt("\n".join(lines))
        return answer is not None and answer.strip().lower() in AFFIRMATIVE_ANSWERS

    def _acquire_one(self, sideload: SideloadRegistration) -> Path:
        source = sideload.sideloaded_package
        if isinstance(source, GithubSource):
            return self.cache.ensure_pinned(source.url, source.sha)
        if isinstance(source, RelativeSource):
            directory = (self.env.cwd / source.path).resolve()
            if not directory.is_dir():
                raise FileNotFound(
                    f"Sideload source directory does not exist: {directory}",
                    details={"path": str(directory)},
                )
            return directory
        assert_never(source)

    def acquire(self, config: SideloadConfig) -> Result[list[AcquiredSource]]:
        diagnostics: list[Diagnostic] = []
        acquired: list[AcquiredSource] = []
        unavailable: list[str] = []
        if any(isinstance(s.sideloaded_package, GithubSource) for s in config.sideloads):
            try:
                self.fs.mkdir(self.env.cache_root)
            except FileError as e:
                return Result(diagnostics=[from_error(e)])
        for sideload in config.sideloads:
            name = sideload.original_package_name
            location = PackageLocation(name, sideload.original_package_version)
            try:
                directory = self._acquire_one(sideload)
            except FileNotFound as e:
                diagnostics.append(
                    diagnostic("SOURCE_NOT_FOUND", e.message, location=location, details=e.details)
                )
                unavailable.append(name)
                continue
            except (GitError, FileError) as e:
                diagnostics.append(from_error(e, location=location))
                unavailable.append(name)
                continue
            acquired.append(AcquiredSource(registration=sideload, directory=directory))
        if unavailable:
            diagnostics.append(
                diagnostic(
                    "SIDELOADS_UNAVAILABLE",
                    f"{len(unavailable)} of {len(config.sideloads)} sideload(s) unavailable: "
                    + ", ".join(unavailable),
                    details={
                        "available": [a.registration.original_package_name for a in acquired],
                        "unavailable": unavailable,
                    },
                )
            )
            return Result(diagnostics=diagnostics)
        return Result(value=acquired)

    def _delete_artifacts(self, slot: Path) -> None:
        for filename in ARTIFACT_FILENAMES:
            try:
                self.fs.delete_file(slot / filename)
            except FileNotFound:
                continue

    def _apply_one(self, item: AcquiredSource, packages_root: Path) -> AppliedChange:
        sideload = item.registration
        author, name = sideload.original_package_name.split("/")
        slot = package_slot(packages_root, author, name, sideload.original_package_version)
        self._delete_artifacts(slot)
        stage = self.workspace.begin_transaction(slot)
        try:
            self.fs.copy_directory(item.directory, stage, exclude=VCS_METADATA_DIRS)
            self.fs.write_file(stage / MARKER_FILENAME, "")
        except AdapterError:
            self.workspace.abort(stage)
            raise
        self.workspace.commit(stage, slot)
        logger.info("sideloaded %s into %s", sideload.original_package_name, slot)
        return AppliedChange(
            package_name=sideload.original_package_name,
            action="sideloaded",
            source=sideload.sideloaded_package.describe(),
        )

    def apply(self, acquired: list[AcquiredSource], packages_root: Path) -> Result[list[AppliedChange]]:
        changes: list[AppliedChange] = []
        for item in acquired:
            name = item.registration.original_package_name
            try:
                changes.append(self._apply_one(item, packages_root))
            except AdapterError as e:
                return Result(
                    value=None,
                    diagnostics=[
                        diagnostic(
                            "PACKAGE_COPY_FAILED",
                            f"Could not sideload {name}: {e.message}",
                            location=PackageLocation(name, item.registration.original_package_version),
                            details={
                                "cause_code": e.code,
                                "applied": [c.package_name for c in changes],
                                **(e.details or {}),
                            },
                        )
                    ],
                )
        return Result(value=changes)

    def run(self, mode: InstallMode = "interactive") -> Result[ExecutionReport]:
        self._transition(InstallState.VALIDATING)
        pre = self.validate()
        if pre.value is None:
            return self._fail(pre.diagnostics)
        notes = pre.diagnostics

        if mode == "dry-run":
            planned = _planned_changes(pre.value.config)
            self._transition(InstallState.DONE)
            return Result(
                value=ExecutionReport(
                    message=f"Would install {len(planned)} sideloads (dry-run mode)",
                    changes=planned,
                ),
                diagnostics=notes,
                artifacts=[c.to_json() for c in planned],
            )

        if mode == "interactive":
            try:
                confirmed = self._confirm(pre.value)
            except AdapterError as e:
                return self._fail([*notes, from_error(e)])
            if not confirmed:
                self._transition(InstallState.DONE)
                return Result(
                    value=ExecutionReport(message="Install cancelled; nothing was changed", changes=[]),
                    diagnostics=[*notes, diagnostic("INSTALL_DECLINED")],
                )

        self._transition(InstallState.ACQUIRING)
        acquired = self.acquire(pre.value.config)
        if acquired.value is None:
            return self._fail([*notes, *acquired.diagnostics])

        self._transition(InstallState.APPLYING)
        applied = self.apply(acquired.value, pre.value.packages_root)
        if applied.value is None:
            return self._fail([*notes, *applied.diagnostics])

        busted = bust_build_cache(self.env, self.fs)
        if has_errors(busted):
            return self._fail([*notes, *busted])

        self._transition(InstallState.DONE)
        return Result(
            value=ExecutionReport(
                message=f"Successfully installed {len(applied.value)} sideloads",
                changes=applied.value,
            ),
            diagnostics=notes,
            artifacts=[c.to_json() for c in applied.value],
        )
