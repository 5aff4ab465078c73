from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from elm_sideload.domain.diagnostics import Diagnostic, has_errors

T = TypeVar("T")


def _new_diagnostics() -> list[Diagnostic]:
    return []


def _new_artifacts() -> list[dict[str, Any]]:
    return []


@dataclass
class Result(Generic[T]):
    value: T | None = None
    diagnostics: list[Diagnostic] = field(default_factory=_new_diagnostics)
    artifacts: list[dict[str, Any]] = field(default_factory=_new_artifacts)

    @property
    def ok(self) -> bool:
        return not has_errors(self.diagnostics)

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1
