"""
Git Command Module

Handles the pieces of a single git invocation:
- Credential resolution and URL authentication
- Command building per operation
- Temporary patch files
- Subprocess execution
"""

from git_extended.services.git.credentials import (
    CredentialProvider,
    CredentialResolver,
    EnvironmentCredentialProvider,
    InMemoryCredentialProvider,
    JsonFileCredentialProvider,
)
from git_extended.services.git.execution import GitCommandExecutor
from git_extended.services.git.temp_files import TemporaryResource, write_temp_patch
from git_extended.services.git.url_management import authenticate_url, redact_credentials

__all__ = [
    "CredentialProvider",
    "CredentialResolver",
    "EnvironmentCredentialProvider",
    "GitCommandExecutor",
    "InMemoryCredentialProvider",
    "JsonFileCredentialProvider",
    "TemporaryResource",
    "authenticate_url",
    "redact_credentials",
    "write_temp_patch",
]
