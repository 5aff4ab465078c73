from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path

from elm_sideload.adapters.errors import CommandNotFound, CommandTimeout
from elm_sideload.ports.command_runner import CommandResult

logger = logging.getLogger(__name__)


class SubprocessCommandRunner:
    def __init__(self, timeout: float | None = None) -> None:
        self.timeout = timeout

    def run(self, args: list[str], cwd: Path | None = None) -> CommandResult:
        logger.debug("run %s (cwd=%s)", " ".join(args), cwd)
        # no credential prompts
        env = {**os.environ, "GIT_TERMINAL_PROMPT": "0"}
        try:
            completed = subprocess.run(
                args,
                cwd=cwd,
                env=env,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except FileNotFoundError as e:
            raise CommandNotFound(f"Executable not found: {args[0]}", cause=e)
        except subprocess.TimeoutExpired as e:
            raise CommandTimeout(
                f"Command timed out after {self.timeout}s: {' '.join(args)}",
                details={"command": " ".join(args)},
                cause=e,
            )
        if completed.returncode != 0:
            logger.debug("exit %s: %s", completed.returncode, completed.stderr.strip())
        return CommandResult(
            exit_code=completed.returncode,
            stdout=completed.stdout,
            stderr=completed.stderr,
        )
