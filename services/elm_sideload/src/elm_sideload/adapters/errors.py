from dataclasses import dataclass
from typing import Any, ClassVar


@dataclass
class AdapterError(Exception):
    message: str
    details: dict[str, Any] | None = None
    hint: str | None = None
    cause: Exception | None = None

    code: ClassVar[str] = "COMMAND_ERROR"

    def __str__(self) -> str:
        return self.message


class GitError(AdapterError):
    pass


class RepoNotFound(GitError):
    code = "REPO_NOT_FOUND"


class ShaNotFound(GitError):
    code = "SHA_NOT_FOUND"


class DirtyRepo(GitError):
    code = "DIRTY_REPO"


class NetworkError(GitError):
    code = "NETWORK_ERROR"


class CloneError(GitError):
    code = "CLONE_ERROR"


class CheckoutError(GitError):
    code = "CHECKOUT_ERROR"


class PullError(GitError):
    code = "PULL_ERROR"


class GitCommandError(GitError):
    code = "COMMAND_ERROR"


class GitNotAvailable(GitError):
    code = "GIT_NOT_AVAILABLE"


class InvalidRemoteReference(GitError):
    code = "INVALID_REMOTE_REFERENCE"


class FileError(AdapterError):
    code = "WRITE_ERROR"


class FileNotFound(FileError):
    code = "FILE_NOT_FOUND"


class ReadError(FileError):
    code = "READ_ERROR"


class WriteError(FileError):
    code = "WRITE_ERROR"


class PermissionDenied(FileError):
    code = "PERMISSION_DENIED"


class DirectoryNotFound(FileError):
    code = "DIRECTORY_NOT_FOUND"


class CopyError(FileError):
    code = "COPY_ERROR"


class CommandNotFound(AdapterError):
    code = "GIT_NOT_AVAILABLE"


class CommandTimeout(AdapterError):
    code = "COMMAND_ERROR"


class PromptFailed(AdapterError):
    code = "PROMPT_FAILED"
