from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Literal

Action = Literal["sideloaded", "restored"]

OFFICIAL_SOURCE = "official package repository"


@dataclass(frozen=True)
class AppliedChange:
    package_name: str
    action: Action
    source: str

    def to_json(self) -> dict[str, Any]:
        data = asdict(self)
        return {"packageName": data["package_name"], "action": data["action"], "source": data["source"]}


@dataclass(frozen=True)
class ExecutionReport:
    message: str
    changes: list[AppliedChange]
