from pathlib import Path
import json
import logging
import os
import sys

import typer

from elm_sideload.adapters.filesystem.local import LocalFileSystem
from elm_sideload.adapters.command_runner.subprocess_runner import SubprocessCommandRunner
from elm_sideload.adapters.git.cli import GitCli
from elm_sideload.adapters.user_io.terminal import TerminalPrompt
from elm_sideload.adapters.workspace.slot import SlotWorkspace
from elm_sideload.application.diagnostic_catalog import diagnostic
from elm_sideload.application.execute import Runtime, execute_command
from elm_sideload.application.help_text import HELP_TEXT
from elm_sideload.application.result_serialization import serialize_result
from elm_sideload.domain.changes import ExecutionReport
from elm_sideload.domain.commands import (
    Command,
    ConfigureCommand,
    HelpCommand,
    InitCommand,
    InstallCommand,
    InstallMode,
    UnloadCommand,
)
from elm_sideload.domain.diagnostics import Diagnostic, Severity
from elm_sideload.domain.environment import Environment
from elm_sideload.domain.result import Result
from elm_sideload.domain.sources import (
    GithubBranchInput,
    GithubShaInput,
    RelativeInput,
    SourceInput,
)

app = typer.Typer(add_completion=False, invoke_without_command=True)

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
        force=True,
    )


def _environment() -> Environment:
    return Environment(
        cwd=Path.cwd().resolve(),
        home=Path.home(),
        platform=sys.platform,
        elm_home=os.environ.get("ELM_HOME") or None,
        appdata=os.environ.get("APPDATA") or None,
    )


def _runtime(env: Environment) -> Runtime:
    return Runtime(
        env=env,
        fs=LocalFileSystem(),
        git=GitCli(SubprocessCommandRunner()),
        workspace=SlotWorkspace(),
        prompt=TerminalPrompt(),
    )


def parse_source(
    github: str | None,
    branch: str | None,
    sha: str | None,
    relative: str | None,
) -> SourceInput | None:
    if relative is not None:
        if github is not None or branch is not None or sha is not None:
            return None
        return RelativeInput(path=relative)
    if github is None:
        return None
    if branch is not None and sha is None:
        return GithubBranchInput(url=github, branch=branch)
    if sha is not None and branch is None:
        return GithubShaInput(url=github, sha=sha)
    return None


def install_mode(always: bool, dry_run: bool) -> InstallMode | None:
    if always and dry_run:
        return None
    if always:
        return "always"
    if dry_run:
        return "dry-run"
    return "interactive"


def _echo_diagnostic(diag: Diagnostic) -> None:
    if diag.severity == Severity.INFO:
        typer.echo(f"note: {diag.message}", err=True)
        return
    typer.echo(f"{diag.severity.value}[{diag.code}]: {diag.message}", err=True)
    details = diag.details or {}
    status = details.get("status")
    if status:
        typer.echo("  uncommitted changes:", err=True)
        for line in str(status).splitlines():
            typer.echo(f"    {line}", err=True)
    commits = details.get("recent_commits")
    if commits:
        typer.echo("  recent commits:", err=True)
        for line in commits:
            typer.echo(f"    {line}", err=True)
    for key in ("available", "unavailable"):
        if key in details:
            names = ", ".join(details[key]) or "(none)"
            typer.echo(f"  {key}: {names}", err=True)
    if diag.hint:
        typer.echo(f"  hint: {diag.hint}", err=True)


def _emit(result: Result[ExecutionReport], command: str, args: list[str], json_output: bool) -> None:
    if json_output:
        typer.echo(json.dumps(serialize_result(result, command=command, args=args)))
        raise typer.Exit(result.exit_code)
    for diag in result.diagnostics:
        _echo_diagnostic(diag)
    report = result.value
    if report is not None:
        typer.echo(report.message)
        for change in report.changes:
            typer.echo(f"  {change.package_name}: {change.action} from {change.source}")
    raise typer.Exit(result.exit_code)


def _run(command: Command, name: str, args: list[str], json_output: bool) -> None:
    env = _environment()
    result = execute_command(command, _runtime(env))
    _emit(result, name, args, json_output)


def _invalid_arguments(name: str, args: list[str], message: str, json_output: bool) -> None:
    _emit(Result(diagnostics=[diagnostic("INVALID_ARGUMENTS", message)]), name, args, json_output)


@app.callback()
def main(ctx: typer.Context) -> None:
    """Sideload / override Elm packages from your elm.json."""
    if ctx.invoked_subcommand is None:
        typer.echo(HELP_TEXT)


@app.command("help")
def help_command() -> None:
    """Print the long-form help text."""
    _emit(execute_command(HelpCommand(), _runtime(_environment())), "help", [], False)


@app.command()
def init(
    json_output: bool = typer.Option(False, "--json"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    """Create elm.sideload.json and the local cache directory."""
    configure_logging(verbose)
    _run(InitCommand(), "init", [], json_output)


@app.command("configure")
def configure_command(
    package: str = typer.Argument(..., help="Package to override, e.g. elm/virtual-dom"),
    github: str | None = typer.Option(None, "--github", help="Git repository URL"),
    branch: str | None = typer.Option(None, "--branch", help="Branch to pin to its current commit"),
    sha: str | None = typer.Option(None, "--sha", help="Commit to pin to"),
    relative: str | None = typer.Option(None, "--relative", help="Local package directory"),
    json_output: bool = typer.Option(False, "--json"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    """Register a sideload for a package in elm.json."""
    configure_logging(verbose)
    args = [package] + [
        f"--{flag}={value}"
        for flag, value in (("github", github), ("branch", branch), ("sha", sha), ("relative", relative))
        if value is not None
    ]
    source = parse_source(github, branch, sha, relative)
    if source is None:
        _invalid_arguments(
            "configure",
            args,
            "Use exactly one of: --github URL --branch NAME, --github URL --sha SHA, --relative PATH",
            json_output,
        )
        return
    _run(ConfigureCommand(package_name=package, source=source), "configure", args, json_output)


@app.command()
def install(
    always: bool = typer.Option(False, "--always", help="Apply without asking for confirmation"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Report what would be installed"),
    json_output: bool = typer.Option(False, "--json"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    """Copy every configured sideload into ELM_HOME."""
    configure_logging(verbose)
    args = [flag for flag, on in (("--always", always), ("--dry-run", dry_run)) if on]
    mode = install_mode(always, dry_run)
    if mode is None:
        _invalid_arguments("install", args, "--always and --dry-run cannot be combined", json_output)
        return
    _run(InstallCommand(mode=mode), "install", args, json_output)


@app.command()
def unload(
    json_output: bool = typer.Option(False, "--json"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    """Remove sideloaded packages from ELM_HOME."""
    configure_logging(verbose)
    _run(UnloadCommand(), "unload", [], json_output)
