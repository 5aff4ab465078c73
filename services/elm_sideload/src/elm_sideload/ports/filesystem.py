from pathlib import Path
from typing import Iterable, Protocol


class FileSystemPort(Protocol):
    def read_file(self, path: Path) -> str: ...

    def write_file(self, path: Path, content: str) -> None: ...

    def exists(self, path: Path) -> bool: ...

    def mkdir(self, path: Path) -> None: ...

    def delete_file(self, path: Path) -> None: ...

    def delete_dir(self, path: Path) -> None: ...

    def copy_directory(
        self, source: Path, target: Path, exclude: Iterable[str] = ()
    ) -> None: ...
