from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, TypeAlias

from elm_sideload.domain.sources import SourceInput

InstallMode = Literal["interactive", "always", "dry-run"]


@dataclass(frozen=True)
class HelpCommand:
    pass


@dataclass(frozen=True)
class InitCommand:
    pass


@dataclass(frozen=True)
class ConfigureCommand:
    package_name: str
    source: SourceInput


@dataclass(frozen=True)
class InstallCommand:
    mode: InstallMode = "interactive"


@dataclass(frozen=True)
class UnloadCommand:
    pass


Command: TypeAlias = (
    HelpCommand | InitCommand | ConfigureCommand | InstallCommand | UnloadCommand
)
