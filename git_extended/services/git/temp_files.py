"""Temporary files used by git commands.

Patch text supplied inline is written to a uniquely named file before the
apply command runs; TemporaryResource guarantees the file is removed once
the command has finished, whatever its outcome.
"""

import asyncio
import logging
import os
import time
import uuid
from typing import Optional

from git_extended.common.config.config import GIT_PATCH_TEMP_DIR
from git_extended.common.exception import GitExtendedError, TempFileCleanupError

logger = logging.getLogger(__name__)

PATCH_FILE_PREFIX = "patch-"


def make_patch_path(directory: Optional[str] = None) -> str:
    """Return a fresh patch file path: ``patch-<epoch ms>-<random suffix>``."""
    directory = directory or GIT_PATCH_TEMP_DIR
    name = f"{PATCH_FILE_PREFIX}{int(time.time() * 1000)}-{uuid.uuid4().hex[:10]}"
    return os.path.join(directory, name)


def _write_new_file(path: str, text: str) -> None:
    # "x" refuses to overwrite an existing file
    with open(path, "x", encoding="utf-8", newline="") as f:
        f.write(text)


async def write_temp_patch(text: str, directory: Optional[str] = None) -> str:
    """Write patch text to a new temporary file.

    Args:
        text: Patch contents
        directory: Target directory (defaults to GIT_PATCH_TEMP_DIR)

    Returns:
        Path of the written file
    """
    path = make_patch_path(directory)
    await asyncio.to_thread(_write_new_file, path, text)
    logger.debug(f"Wrote patch text ({len(text)} chars) to {path}")
    return path


class TemporaryResource:
    """Async context manager deleting a temporary file on exit.

    Deletion runs exactly once, on success and on failure. If the body
    raised, a deletion failure is logged and attached to the primary error
    as ``cleanup_error`` instead of replacing it. If the body succeeded, a
    deletion failure raises TempFileCleanupError.
    """

    def __init__(self, path: Optional[str], item_index: Optional[int] = None):
        self.path = path
        self.item_index = item_index
        self._released = False

    async def __aenter__(self) -> Optional[str]:
        return self.path

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        cleanup_error = await self.release()
        if cleanup_error is None:
            return False

        if exc is not None:
            if isinstance(exc, GitExtendedError):
                exc.cleanup_error = cleanup_error
            return False

        raise cleanup_error

    async def release(self) -> Optional[TempFileCleanupError]:
        """Delete the file once. Returns the cleanup error instead of raising it."""
        if self.path is None or self._released:
            return None
        self._released = True

        try:
            await asyncio.to_thread(os.remove, self.path)
            logger.debug(f"Removed temporary file {self.path}")
            return None
        except FileNotFoundError:
            logger.warning(f"Temporary file already removed: {self.path}")
            return None
        except OSError as e:
            logger.error(f"Failed to remove temporary file {self.path}: {e}")
            return TempFileCleanupError(self.path, str(e), self.item_index)
