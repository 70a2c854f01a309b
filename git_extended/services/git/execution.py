"""Subprocess execution for built git commands.

Commands are run through the shell, either capturing stdout/stderr up to a
bounded ceiling or discarding them entirely.
"""

import asyncio
import logging
import os
import signal
from typing import Optional

from git_extended.common.config.config import GIT_MAX_BUFFER_BYTES
from git_extended.common.exception import BufferOverflowError, CommandExecutionError
from git_extended.models.types import ExecutionResult
from git_extended.services.git.url_management import redact_credentials

logger = logging.getLogger(__name__)

# Constants
READ_CHUNK_SIZE = 64 * 1024


class GitCommandExecutor:
    """Runs shell commands in captured or discard mode."""

    def __init__(self, max_buffer: int = GIT_MAX_BUFFER_BYTES):
        """Initialize the executor.

        Args:
            max_buffer: Per-stream capture ceiling in bytes
        """
        if max_buffer <= 0:
            raise ValueError("max_buffer must be positive")
        self.max_buffer = max_buffer

    async def run(self, command: str, capture_output: bool = True) -> ExecutionResult:
        """Run a command in the requested mode.

        Args:
            command: Shell command string
            capture_output: False to discard stdout/stderr

        Returns:
            ExecutionResult with trimmed output, or a skipped result

        Raises:
            CommandExecutionError: If the command exits nonzero
            BufferOverflowError: If captured output exceeds the ceiling
        """
        if capture_output:
            return await self.run_captured(command)
        return await self.run_discarded(command)

    async def run_captured(self, command: str) -> ExecutionResult:
        """Run a command and return its trimmed stdout and stderr."""
        logger.info(f"Running git command: {redact_credentials(command)}")
        process = await asyncio.create_subprocess_shell(
            command,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            start_new_session=True,
        )

        try:
            stdout, stderr = await asyncio.gather(
                self._read_stream(process, process.stdout, "stdout"),
                self._read_stream(process, process.stderr, "stderr"),
            )
        except BufferOverflowError as e:
            _kill_process_group(process)
            await process.wait()
            logger.error(f"Command output exceeded {self.max_buffer} bytes on {e.stream}")
            raise

        returncode = await process.wait()
        stdout_str = stdout.decode("utf-8", errors="replace").strip()
        stderr_str = stderr.decode("utf-8", errors="replace").strip()

        if returncode != 0:
            error_text = redact_credentials(stderr_str or stdout_str)
            logger.error(f"Git command failed with exit code {returncode}: {error_text}")
            raise CommandExecutionError(returncode, error_text)

        return ExecutionResult(stdout=stdout_str, stderr=stderr_str)

    async def run_discarded(self, command: str) -> ExecutionResult:
        """Run a command with all standard streams ignored."""
        logger.info(f"Running git command (output discarded): {redact_credentials(command)}")
        process = await asyncio.create_subprocess_shell(
            command,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.DEVNULL,
            stderr=asyncio.subprocess.DEVNULL,
        )
        returncode = await process.wait()

        if returncode != 0:
            logger.error(f"Git command failed with exit code {returncode}")
            raise CommandExecutionError(returncode)

        return ExecutionResult(skipped=True)

    async def _read_stream(
        self,
        process: asyncio.subprocess.Process,
        stream: Optional[asyncio.StreamReader],
        name: str,
    ) -> bytes:
        if stream is None:
            return b""

        buffer = bytearray()
        while True:
            chunk = await stream.read(READ_CHUNK_SIZE)
            if not chunk:
                break
            buffer.extend(chunk)
            if len(buffer) > self.max_buffer:
                # Stop the writer so the sibling stream reaches EOF too
                _kill_process_group(process)
                raise BufferOverflowError(name, self.max_buffer)
        return bytes(buffer)


def _kill_process_group(process: asyncio.subprocess.Process) -> None:
    """Kill the shell and every child it spawned."""
    if process.returncode is not None:
        return
    try:
        if hasattr(os, "killpg"):
            os.killpg(os.getpgid(process.pid), signal.SIGKILL)
        else:
            process.kill()
    except ProcessLookupError:
        pass
