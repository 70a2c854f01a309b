"""
Exception hierarchy for git work item processing.

Every error raised while handling a work item derives from GitExtendedError,
so the batch processor can annotate it with the failing item's index before
either recording it or re-raising it.
"""

from typing import Optional


class GitExtendedError(Exception):
    """Base class for all work item errors."""

    def __init__(self, message: str, item_index: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.item_index = item_index
        self.cleanup_error: Optional["TempFileCleanupError"] = None

    def __str__(self) -> str:
        if self.item_index is None:
            return self.message
        return f"{self.message} [item {self.item_index}]"


class UnsupportedOperationError(GitExtendedError):
    """Raised when an operation tag has no registered command builder."""

    def __init__(self, operation: str, item_index: Optional[int] = None):
        super().__init__(f"Unsupported operation {operation}", item_index)
        self.operation = operation


class CredentialLookupError(GitExtendedError):
    """Raised when a named credential is missing or malformed."""

    def __init__(self, credential_name: str, reason: str = "not found", item_index: Optional[int] = None):
        super().__init__(f"Credential '{credential_name}' {reason}", item_index)
        self.credential_name = credential_name


class BuildValidationError(GitExtendedError):
    """Raised when a command cannot be built from the given parameters."""

    pass


class InvalidRemoteUrlError(BuildValidationError):
    """Raised when a remote that looks like a URL cannot be parsed for authentication."""

    pass


class CommandExecutionError(GitExtendedError):
    """Raised when the git process exits with a nonzero code."""

    def __init__(
        self,
        exit_code: Optional[int],
        stderr: Optional[str] = None,
        item_index: Optional[int] = None,
    ):
        if stderr:
            message = f"Command failed with exit code {exit_code}: {stderr}"
        else:
            message = f"Command failed with exit code {exit_code}"
        super().__init__(message, item_index)
        self.exit_code = exit_code
        self.stderr = stderr


class BufferOverflowError(GitExtendedError):
    """Raised when captured output exceeds the configured ceiling."""

    def __init__(self, stream: str, limit: int, item_index: Optional[int] = None):
        super().__init__(f"{stream} maxBuffer length exceeded ({limit} bytes)", item_index)
        self.stream = stream
        self.limit = limit


class TempFileCleanupError(GitExtendedError):
    """Raised when a temporary patch file could not be deleted."""

    def __init__(self, path: str, reason: str, item_index: Optional[int] = None):
        super().__init__(f"Failed to remove temporary file {path}: {reason}", item_index)
        self.path = path


class ItemProcessingError(GitExtendedError):
    """Wraps an unexpected exception raised while processing a work item."""

    pass
