from __future__ import annotations

from dataclasses import dataclass
from typing import assert_never

from elm_sideload.application.configure import configure
from elm_sideload.application.help_text import HELP_TEXT
from elm_sideload.application.init_project import init_project
from elm_sideload.application.install import Installer
from elm_sideload.application.repo_cache import RepositoryCache
from elm_sideload.application.unload import unload
from elm_sideload.domain.changes import ExecutionReport
from elm_sideload.domain.commands import (
    Command,
    ConfigureCommand,
    HelpCommand,
    InitCommand,
    InstallCommand,
    UnloadCommand,
)
from elm_sideload.domain.environment import Environment
from elm_sideload.domain.result import Result
from elm_sideload.ports.filesystem import FileSystemPort
from elm_sideload.ports.git import GitPort
from elm_sideload.ports.user_io import PromptPort
from elm_sideload.ports.workspace import WorkspacePort


@dataclass
class Runtime:
    env: Environment
    fs: FileSystemPort
    git: GitPort
    workspace: WorkspacePort
    prompt: PromptPort | None = None

    def repository_cache(self) -> RepositoryCache:
        return RepositoryCache(self.git, self.env.cache_root)


def execute_command(command: Command, runtime: Runtime) -> Result[ExecutionReport]:
    if isinstance(command, HelpCommand):
        return Result(value=ExecutionReport(message=HELP_TEXT, changes=[]))
    if isinstance(command, InitCommand):
        return init_project(runtime.env, runtime.fs)
    if isinstance(command, ConfigureCommand):
        return configure(
            runtime.env,
            runtime.fs,
            runtime.repository_cache(),
            command.package_name,
            command.source,
        )
    if isinstance(command, InstallCommand):
        installer = Installer(
            runtime.env,
            runtime.fs,
            runtime.repository_cache(),
            runtime.workspace,
            prompt=runtime.prompt,
        )
        return installer.run(command.mode)
    if isinstance(command, UnloadCommand):
        return unload(runtime.env, runtime.fs)
    assert_never(command)
