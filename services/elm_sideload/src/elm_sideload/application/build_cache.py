from __future__ import annotations

import logging

from elm_sideload.adapters.errors import FileError
from elm_sideload.application.diagnostic_catalog import from_error
from elm_sideload.domain.diagnostics import Diagnostic, FileLocation
from elm_sideload.domain.environment import Environment
from elm_sideload.ports.filesystem import FileSystemPort

logger = logging.getLogger(__name__)


def bust_build_cache(env: Environment, fs: FileSystemPort) -> list[Diagnostic]:
    """Delete ``elm-stuff/<version>`` so the compiler rebuilds against the new sources."""
    if not fs.exists(env.build_cache):
        return []
    try:
        fs.delete_dir(env.build_cache)
    except FileError as e:
        return [from_error(e, location=FileLocation(str(env.build_cache)))]
    logger.info("removed project build cache %s", env.build_cache)
    return []
