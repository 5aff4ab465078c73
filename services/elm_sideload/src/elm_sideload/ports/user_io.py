from typing import Protocol


class PromptPort(Protocol):
    def prompt(self, message: str) -> str | None: ...
