from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TypeAlias


@dataclass(frozen=True)
class GithubSource:
    """A remote repository pinned to one immutable commit."""

    url: str
    sha: str

    def describe(self) -> str:
        return f"{self.url}@{self.sha[:7]}"

    def to_json(self) -> dict[str, Any]:
        return {"type": "github", "url": self.url, "pinTo": {"sha": self.sha}}


@dataclass(frozen=True)
class RelativeSource:
    path: str

    def describe(self) -> str:
        return self.path

    def to_json(self) -> dict[str, Any]:
        return {"type": "relative", "path": self.path}


SideloadSource: TypeAlias = GithubSource | RelativeSource


# Inputs accepted from the command line, before resolution. Only the
# resolved forms above are ever persisted.


@dataclass(frozen=True)
class GithubBranchInput:
    url: str
    branch: str


@dataclass(frozen=True)
class GithubShaInput:
    url: str
    sha: str


@dataclass(frozen=True)
class RelativeInput:
    path: str


SourceInput: TypeAlias = GithubBranchInput | GithubShaInput | RelativeInput
