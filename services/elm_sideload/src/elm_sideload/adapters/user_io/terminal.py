from __future__ import annotations

import logging
import queue
import threading

import typer

from elm_sideload.adapters.errors import PromptFailed

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 60.0


class TerminalPrompt:
    """Asks on the terminal; returns ``None`` when nobody answers in time."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> None:
        self.timeout = timeout

    def _read(self, message: str) -> str:
        return typer.prompt(message, default="", show_default=False)

    def prompt(self, message: str) -> str | None:
        answers: queue.Queue[tuple[str | None, OSError | None]] = queue.Queue(maxsize=1)

        def _worker() -> None:
            try:
                answers.put((self._read(message), None))
            except (EOFError, KeyboardInterrupt, typer.Abort):
                answers.put((None, None))
            except OSError as e:
                answers.put((None, e))

        threading.Thread(target=_worker, daemon=True).start()
        try:
            answer, error = answers.get(timeout=self.timeout)
        except queue.Empty:
            logger.info("no answer within %ss", self.timeout)
            typer.echo("")
            return None
        if error is not None:
            raise PromptFailed("Could not read from the terminal", cause=error)
        return answer
