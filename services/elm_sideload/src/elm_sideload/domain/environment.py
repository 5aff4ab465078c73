from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from elm_sideload.domain.diagnostics import Diagnostic, Severity
from elm_sideload.domain.registry import SideloadConfig
from elm_sideload.domain.result import Result

ELM_VERSION = "0.19.1"
CONFIG_FILENAME = "elm.sideload.json"
CACHE_DIRNAME = ".elm.sideload.cache"
MARKER_FILENAME = ".elm-sideload"
ARTIFACT_FILENAMES = ("artifacts.dat", "artifacts.x.dat")
VCS_METADATA_DIRS = (".git",)


@dataclass(frozen=True)
class Environment:
    """Everything the pipeline needs from the surrounding process."""

    cwd: Path
    home: Path
    platform: str
    elm_home: str | None = None
    appdata: str | None = None

    @property
    def config_path(self) -> Path:
        return self.cwd / CONFIG_FILENAME

    @property
    def cache_root(self) -> Path:
        return self.cwd / CACHE_DIRNAME

    @property
    def build_cache(self) -> Path:
        return self.cwd / "elm-stuff" / ELM_VERSION

    def default_elm_home(self) -> Path:
        if self.platform.startswith("win"):
            base = Path(self.appdata) if self.appdata else self.home / "AppData" / "Roaming"
            return base / "elm"
        return self.home / ".elm"


def resolve_packages_root(env: Environment, config: SideloadConfig) -> Result[Path]:
    """Find ``<ELM_HOME>/0.19.1/packages`` for this invocation.

    Precedence: an explicit ``elmHomePackagesPath`` in the config, then the
    ``ELM_HOME`` environment variable, then the platform default. When
    ``requireElmHome`` is set the platform default is never used.
    """
    override = config.elm_home_packages_path
    if override is not None:
        path = Path(override.path)
        if override.type == "relative" or not path.is_absolute():
            path = env.cwd / path
        return Result(value=path)
    if env.elm_home:
        return Result(value=Path(env.elm_home) / ELM_VERSION / "packages")
    if config.require_elm_home:
        return Result(
            diagnostics=[
                Diagnostic(
                    code="NO_HOME_DIRECTORY",
                    rule="precondition.elm_home",
                    severity=Severity.ERROR,
                    message="requireElmHome is true but ELM_HOME is not set",
                    hint="Export ELM_HOME or set requireElmHome to false.",
                )
            ]
        )
    return Result(value=env.default_elm_home() / ELM_VERSION / "packages")


def package_slot(packages_root: Path, author: str, name: str, version: str) -> Path:
    return packages_root / author / name / version
