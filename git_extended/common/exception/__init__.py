from git_extended.common.exception.exceptions import (
    BufferOverflowError,
    BuildValidationError,
    CommandExecutionError,
    CredentialLookupError,
    GitExtendedError,
    InvalidRemoteUrlError,
    ItemProcessingError,
    TempFileCleanupError,
    UnsupportedOperationError,
)

__all__ = [
    "BufferOverflowError",
    "BuildValidationError",
    "CommandExecutionError",
    "CredentialLookupError",
    "GitExtendedError",
    "InvalidRemoteUrlError",
    "ItemProcessingError",
    "TempFileCleanupError",
    "UnsupportedOperationError",
]
