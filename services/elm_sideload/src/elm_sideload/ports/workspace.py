from pathlib import Path
from typing import Protocol


class WorkspacePort(Protocol):
    def begin_transaction(self, target: Path) -> Path: ...
    def commit(self, stage: Path, target: Path) -> None: ...
    def abort(self, stage: Path) -> None: ...
