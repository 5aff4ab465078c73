from __future__ import annotations

import errno
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Iterable

from elm_sideload.adapters.errors import (
    CopyError,
    DirectoryNotFound,
    FileError,
    FileNotFound,
    PermissionDenied,
    ReadError,
    WriteError,
)

logger = logging.getLogger(__name__)


def _classify(e: OSError, path: Path, fallback: type[FileError]) -> FileError:
    details = {"path": str(path)}
    if isinstance(e, PermissionError):
        return PermissionDenied(f"Permission denied: {path}", details=details, cause=e)
    if isinstance(e, FileNotFoundError) or e.errno == errno.ENOENT:
        return FileNotFound(f"File not found: {path}", details=details, cause=e)
    return fallback(f"{e.strerror or e}: {path}", details=details, cause=e)


class LocalFileSystem:
    def read_file(self, path: Path) -> str:
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            raise _classify(e, path, ReadError)
        except UnicodeDecodeError as e:
            raise ReadError(f"Not a UTF-8 text file: {path}", details={"path": str(path)}, cause=e)

    def write_file(self, path: Path, content: str) -> None:
        """Replace ``path`` wholesale; readers never observe a partial file."""
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(content)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise _classify(e, path, WriteError)

    def exists(self, path: Path) -> bool:
        return path.exists()

    def mkdir(self, path: Path) -> None:
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise _classify(e, path, WriteError)

    def delete_file(self, path: Path) -> None:
        try:
            path.unlink()
        except OSError as e:
            raise _classify(e, path, WriteError)

    def delete_dir(self, path: Path) -> None:
        if not path.exists():
            return
        try:
            shutil.rmtree(path)
        except OSError as e:
            raise _classify(e, path, WriteError)

    def copy_directory(self, source: Path, target: Path, exclude: Iterable[str] = ()) -> None:
        if not source.is_dir():
            raise DirectoryNotFound(
                f"Source directory does not exist: {source}",
                details={"path": str(source)},
            )
        excluded = set(exclude)
        logger.debug("copy %s -> %s (excluding %s)", source, target, sorted(excluded))
        try:
            shutil.copytree(
                source,
                target,
                ignore=shutil.ignore_patterns(*excluded) if excluded else None,
                dirs_exist_ok=True,
            )
        except PermissionError as e:
            raise PermissionDenied(f"Permission denied copying {source}", details={"path": str(source)}, cause=e)
        except (OSError, shutil.Error) as e:
            raise CopyError(
                f"Could not copy {source} to {target}",
                details={"source": str(source), "target": str(target)},
                cause=e,
            )
