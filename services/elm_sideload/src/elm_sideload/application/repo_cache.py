from __future__ import annotations

import logging
import threading
from pathlib import Path

from elm_sideload.adapters.errors import DirtyRepo, InvalidRemoteReference, ShaNotFound
from elm_sideload.domain.naming import repo_coordinates
from elm_sideload.ports.git import GitPort

logger = logging.getLogger(__name__)

DIRTY_LOG_DEPTH = 5
MISSING_SHA_LOG_DEPTH = 10


class RepositoryCache:
    """Local clones of sideload repositories under ``<root>/<author>/<repo>``.

    An existing clone is reused, never recloned: it must be clean, is fetched,
    and must contain the requested commit before it is checked out. Local
    modifications are reported, never discarded.
    """

    def __init__(self, git: GitPort, root: Path) -> None:
        self.git = git
        self.root = root
        self._guard = threading.Lock()
        self._locks: dict[Path, threading.Lock] = {}

    def _lock_for(self, repo_dir: Path) -> threading.Lock:
        with self._guard:
            return self._locks.setdefault(repo_dir, threading.Lock())

    def path_for(self, url: str) -> Path:
        coordinates = repo_coordinates(url)
        if coordinates is None:
            raise InvalidRemoteReference(
                f"Cannot derive <author>/<repo> from URL: {url}",
                details={"url": url},
            )
        author, repo = coordinates
        return self.root / author / repo

    def _require_clean(self, repo_dir: Path) -> None:
        if self.git.is_clean(repo_dir):
            return
        status = self.git.status(repo_dir)
        raise DirtyRepo(
            f"Cached repository has uncommitted changes: {repo_dir}",
            details={
                "repo": str(repo_dir),
                "status": status,
                "recent_commits": self.git.recent_commits(repo_dir, DIRTY_LOG_DEPTH),
            },
        )

    def _require_commit(self, repo_dir: Path, sha: str) -> None:
        if self.git.sha_exists(repo_dir, sha):
            return
        raise ShaNotFound(
            f"Commit {sha} not found in {repo_dir}",
            details={
                "sha": sha,
                "repo": str(repo_dir),
                "recent_commits": self.git.recent_commits(repo_dir, MISSING_SHA_LOG_DEPTH),
            },
        )

    def _clone_or_refresh(self, url: str, repo_dir: Path) -> bool:
        """Clone when missing, otherwise check cleanliness and fetch. True if fresh."""
        if not repo_dir.exists():
            logger.info("cloning %s into %s", url, repo_dir)
            self.git.clone(url, repo_dir)
            return True
        self._require_clean(repo_dir)
        logger.info("updating cached clone %s", repo_dir)
        self.git.pull(repo_dir)
        return False

    def ensure_pinned(self, url: str, sha: str, verify_fresh: bool = False) -> Path:
        repo_dir = self.path_for(url)
        with self._lock_for(repo_dir):
            if repo_dir.exists():
                self._require_clean(repo_dir)
                if self.git.current_sha(repo_dir) == sha:
                    logger.debug("%s already at %s", repo_dir, sha)
                    return repo_dir
            fresh = self._clone_or_refresh(url, repo_dir)
            if verify_fresh or not fresh:
                self._require_commit(repo_dir, sha)
            self.git.checkout(repo_dir, sha)
        return repo_dir

    def pin_sha(self, url: str, sha: str) -> str:
        """Check out ``sha`` (possibly abbreviated) and return the full commit id."""
        repo_dir = self.ensure_pinned(url, sha, verify_fresh=True)
        return self.git.current_sha(repo_dir)

    def pin_branch(self, url: str, branch: str) -> str:
        repo_dir = self.path_for(url)
        with self._lock_for(repo_dir):
            self._clone_or_refresh(url, repo_dir)
            sha = self.git.resolve_branch(repo_dir, branch)
            self.git.checkout(repo_dir, sha)
            logger.info("pinned %s@%s to %s", url, branch, sha)
        return sha
