from __future__ import annotations

import re
from urllib.parse import urlparse

from elm_sideload.domain.diagnostics import Diagnostic, PackageLocation, Severity

PACKAGE_NAME_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.-]*/[A-Za-z0-9][A-Za-z0-9_.-]*$")
FULL_SHA_PATTERN = re.compile(r"^[0-9a-f]{40}$")
SHA_INPUT_PATTERN = re.compile(r"^[0-9a-fA-F]{4,40}$")
VERSION_PATTERN = re.compile(r"^[0-9]+\.[0-9]+\.[0-9]+$")


def split_package_name(name: str) -> tuple[str, str] | None:
    if not PACKAGE_NAME_PATTERN.match(name):
        return None
    author, package = name.split("/")
    return author, package


def validate_package_name(name: str) -> list[Diagnostic]:
    if split_package_name(name) is not None:
        return []
    return [
        Diagnostic(
            code="INVALID_PACKAGE_NAME",
            rule="apply.package_name",
            severity=Severity.ERROR,
            message=f"Invalid package name: {name!r} (expected author/name)",
            location=PackageLocation(name),
        )
    ]


def is_full_sha(value: str) -> bool:
    return bool(FULL_SHA_PATTERN.match(value))


def is_sha_input(value: str) -> bool:
    return bool(SHA_INPUT_PATTERN.match(value))


def is_version(value: str) -> bool:
    return bool(VERSION_PATTERN.fullmatch(value))


def repo_coordinates(url: str) -> tuple[str, str] | None:
    """Return ``(author, repo)`` from the last two path segments of a remote URL.

    Handles https URLs, scp-style ``git@host:author/repo.git`` and plain
    filesystem paths. A trailing ``.git`` is stripped from the repo name.
    """
    raw = url.strip().rstrip("/")
    if not raw:
        return None
    parsed = urlparse(raw)
    if parsed.scheme and parsed.netloc:
        path = parsed.path
    elif parsed.scheme == "file":
        path = parsed.path
    elif ":" in raw and not raw.startswith(("/", ".")) and "@" in raw.split(":", 1)[0]:
        path = raw.split(":", 1)[1]
    else:
        path = raw
    segments = [s for s in path.replace("\\", "/").split("/") if s]
    if len(segments) < 2:
        return None
    author, repo = segments[-2], segments[-1]
    if repo.endswith(".git"):
        repo = repo[: -len(".git")]
    if not author or not repo:
        return None
    return author, repo
