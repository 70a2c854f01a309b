"""
Configuration module for the git command adapter.

Values are read once from the environment (and an optional .env file)
at import time.
"""

import os
import tempfile

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def get_int_env(key: str, default: int) -> int:
    """Get integer environment variable, falling back to default when unset."""
    value = os.getenv(key)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {value!r}")


# Git executable
GIT_EXECUTABLE = os.getenv("GIT_EXECUTABLE", "git")

# Output capture ceiling per stream (500 MiB), large enough for verbose log/diff output
GIT_MAX_BUFFER_BYTES = get_int_env("GIT_MAX_BUFFER_BYTES", 500 * 1024 * 1024)

# Remote / credential defaults
GIT_DEFAULT_REMOTE = os.getenv("GIT_DEFAULT_REMOTE", "origin")
GIT_DEFAULT_CREDENTIAL_NAME = os.getenv("GIT_DEFAULT_CREDENTIAL_NAME", "gitExtendedApi")
GIT_CREDENTIALS_FILE = os.getenv("GIT_CREDENTIALS_FILE")

# Patch files written from literal text
GIT_PATCH_TEMP_DIR = os.getenv("GIT_PATCH_TEMP_DIR") or tempfile.gettempdir()

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
APP_LOG_FILE = os.getenv("APP_LOG_FILE")
