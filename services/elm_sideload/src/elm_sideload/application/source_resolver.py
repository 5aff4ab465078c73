from __future__ import annotations

import logging
from typing import assert_never

from elm_sideload.adapters.errors import GitError
from elm_sideload.application.diagnostic_catalog import diagnostic, from_error
from elm_sideload.application.repo_cache import RepositoryCache
from elm_sideload.domain.naming import is_full_sha, is_sha_input
from elm_sideload.domain.result import Result
from elm_sideload.domain.sources import (
    GithubBranchInput,
    GithubShaInput,
    GithubSource,
    RelativeInput,
    RelativeSource,
    SideloadSource,
    SourceInput,
)

logger = logging.getLogger(__name__)


def resolve_source(source: SourceInput, cache: RepositoryCache) -> Result[SideloadSource]:
    """Turn a command-line source into the immutable form that gets persisted.

    Branches are resolved to the commit they currently point at and the
    repository is left cloned and checked out in the cache. Local paths are
    returned untouched; they are checked for existence at install time.
    """
    if isinstance(source, RelativeInput):
        return Result(value=RelativeSource(path=source.path))
    try:
        if isinstance(source, GithubShaInput):
            if not is_sha_input(source.sha):
                return Result(
                    diagnostics=[
                        diagnostic(
                            "INVALID_REMOTE_REFERENCE",
                            f"Not a commit SHA: {source.sha!r}",
                            details={"sha": source.sha},
                        )
                    ]
                )
            sha = cache.pin_sha(source.url, source.sha.lower())
        elif isinstance(source, GithubBranchInput):
            sha = cache.pin_branch(source.url, source.branch)
        else:
            assert_never(source)
    except GitError as e:
        return Result(diagnostics=[from_error(e)])
    if not is_full_sha(sha):
        return Result(
            diagnostics=[
                diagnostic(
                    "INVALID_REMOTE_REFERENCE",
                    f"git returned an unexpected commit id: {sha!r}",
                )
            ]
        )
    logger.debug("resolved %s to %s", source, sha)
    return Result(value=GithubSource(url=source.url, sha=sha))
