from pathlib import Path
from typing import Protocol


class GitPort(Protocol):
    def clone(self, url: str, destination: Path) -> None: ...

    def checkout(self, repo_dir: Path, sha: str) -> None: ...

    def current_sha(self, repo_dir: Path) -> str: ...

    def recent_commits(self, repo_dir: Path, count: int) -> list[str]: ...

    def status(self, repo_dir: Path) -> str: ...

    def is_clean(self, repo_dir: Path) -> bool: ...

    def pull(self, repo_dir: Path) -> None: ...

    def resolve_branch(self, repo_dir: Path, branch: str) -> str: ...

    def sha_exists(self, repo_dir: Path, sha: str) -> bool: ...
