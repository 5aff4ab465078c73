from __future__ import annotations

import logging
from pathlib import Path

from elm_sideload.adapters.errors import (
    CheckoutError,
    CloneError,
    CommandNotFound,
    GitCommandError,
    GitNotAvailable,
    NetworkError,
    PullError,
    InvalidRemoteReference,
    RepoNotFound,
)
from elm_sideload.ports.command_runner import CommandResult, CommandRunnerPort

logger = logging.getLogger(__name__)

REPO_MISSING_MARKERS = (
    "repository not found",
    "not found",
    "does not exist",
    "does not appear to be a git repository",
)
NETWORK_MARKERS = (
    "could not resolve host",
    "unable to access",
    "connection",
    "network",
    "timed out",
    "failed to connect",
)


def _is_network_failure(message: str) -> bool:
    lowered = message.lower()
    return any(marker in lowered for marker in NETWORK_MARKERS)


def _is_missing_repo(message: str) -> bool:
    lowered = message.lower()
    return any(marker in lowered for marker in REPO_MISSING_MARKERS)


class GitCli:
    """Git collaborator that shells out to the ``git`` executable.

    Every failure is raised as one of the classified ``GitError`` subclasses
    so callers can tell a missing repository from a flaky network or a bad
    checkout without parsing stderr themselves.
    """

    def __init__(self, runner: CommandRunnerPort, executable: str = "git") -> None:
        self.runner = runner
        self.executable = executable

    def _invoke(self, args: list[str], cwd: Path | None = None) -> CommandResult:
        command = [self.executable, *args]
        try:
            return self.runner.run(command, cwd=cwd)
        except CommandNotFound as e:
            raise GitNotAvailable(
                "Could not find the `git` executable",
                cause=e,
            )

    def _run(self, args: list[str], cwd: Path | None = None) -> str:
        result = self._invoke(args, cwd)
        if result.exit_code != 0:
            command = " ".join([self.executable, *args])
            raise GitCommandError(
                result.stderr.strip() or f"{command} exited with {result.exit_code}",
                details={"command": command, "exit_code": result.exit_code},
            )
        return result.stdout.strip()

    def _succeeds(self, args: list[str], cwd: Path | None = None) -> bool:
        return self._invoke(args, cwd).exit_code == 0

    def ensure_available(self) -> str:
        return self._run(["--version"])

    def clone(self, url: str, destination: Path) -> None:
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise CloneError(
                f"Could not create {destination.parent} for cloning {url}",
                details={"url": url, "path": str(destination.parent)},
                cause=e,
            )
        try:
            self._run(["clone", "--quiet", url, str(destination)])
        except GitCommandError as e:
            details = {"url": url, **(e.details or {})}
            if _is_network_failure(e.message) and not _is_missing_repo(e.message):
                raise NetworkError(e.message, details=details, cause=e)
            if _is_missing_repo(e.message):
                raise RepoNotFound(f"Repository not found: {url}", details=details, cause=e)
            raise CloneError(f"Could not clone {url}: {e.message}", details=details, cause=e)

    def checkout(self, repo_dir: Path, sha: str) -> None:
        try:
            self._run(
                ["-c", "advice.detachedHead=false", "checkout", "--quiet", sha],
                cwd=repo_dir,
            )
        except GitCommandError as e:
            raise CheckoutError(
                f"Could not check out {sha}: {e.message}",
                details={"sha": sha, **(e.details or {})},
                cause=e,
            )

    def current_sha(self, repo_dir: Path) -> str:
        return self._run(["rev-parse", "HEAD"], cwd=repo_dir)

    def recent_commits(self, repo_dir: Path, count: int) -> list[str]:
        output = self._run(["log", "--oneline", f"-{count}"], cwd=repo_dir)
        return [line for line in output.splitlines() if line.strip()]

    def status(self, repo_dir: Path) -> str:
        return self._run(["status", "--porcelain"], cwd=repo_dir)

    def is_clean(self, repo_dir: Path) -> bool:
        return self.status(repo_dir) == ""

    def pull(self, repo_dir: Path) -> None:
        # Checking out a pinned sha leaves HEAD detached; there is nothing to
        # merge into, so only refresh the remote refs.
        on_branch = self._succeeds(["symbolic-ref", "-q", "HEAD"], cwd=repo_dir)
        args = ["pull", "--ff-only", "--quiet"] if on_branch else ["fetch", "--quiet"]
        logger.debug("%s %s", "pull" if on_branch else "fetch", repo_dir)
        try:
            self._run(args, cwd=repo_dir)
        except GitCommandError as e:
            if _is_network_failure(e.message):
                raise NetworkError(e.message, details=e.details, cause=e)
            raise PullError(f"Could not update {repo_dir}: {e.message}", details=e.details, cause=e)

    def resolve_branch(self, repo_dir: Path, branch: str) -> str:
        for ref in (f"refs/remotes/origin/{branch}", branch):
            result = self._invoke(
                ["rev-parse", "--verify", "--quiet", f"{ref}^{{commit}}"], cwd=repo_dir
            )
            if result.exit_code == 0 and result.stdout.strip():
                return result.stdout.strip()
        raise InvalidRemoteReference(
            f"Branch not found: {branch}",
            details={"branch": branch, "repo": str(repo_dir)},
        )

    def sha_exists(self, repo_dir: Path, sha: str) -> bool:
        return self._succeeds(["cat-file", "-e", f"{sha}^{{commit}}"], cwd=repo_dir)
