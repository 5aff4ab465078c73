from __future__ import annotations

import logging
import os
from pathlib import Path
import shutil
import tempfile

from elm_sideload.adapters.errors import CopyError, WriteError

logger = logging.getLogger(__name__)

SLOT_MODE = 0o755


class SlotWorkspace:
    """Stages a package slot next to its final location and swaps it in."""

    def _rename(self, src: Path, dest: Path) -> None:
        os.replace(src, dest)

    def begin_transaction(self, target: Path) -> Path:
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            stage = Path(tempfile.mkdtemp(prefix=f".{target.name}.stage-", dir=target.parent))
            # mkdtemp is 0700; slots written by the compiler are 0755.
            os.chmod(stage, SLOT_MODE)
            return stage
        except OSError as e:
            raise WriteError(
                f"Could not create staging directory next to {target}",
                details={"path": str(target)},
                cause=e,
            )

    def commit(self, stage: Path, target: Path) -> None:
        backup: Path | None = None
        try:
            if target.exists():
                backup = Path(
                    tempfile.mkdtemp(prefix=f".{target.name}.backup-", dir=target.parent)
                )
                # mkdtemp only reserves the name; the slot itself is moved there.
                backup.rmdir()
                self._rename(target, backup)
            self._rename(stage, target)
            logger.debug("swapped %s into %s", stage, target)
        except Exception as e:
            if backup is not None and backup.exists() and not target.exists():
                self._rename(backup, target)
                backup = None
            raise CopyError(
                f"Could not replace package slot {target}",
                details={"path": str(target)},
                cause=e,
            )
        finally:
            shutil.rmtree(stage, ignore_errors=True)
            if backup is not None:
                shutil.rmtree(backup, ignore_errors=True)

    def abort(self, stage: Path) -> None:
        shutil.rmtree(stage, ignore_errors=True)
