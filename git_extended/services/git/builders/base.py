"""Shared pieces for git command builders.

A builder maps an operation's validated parameters and the repository path
to a single shell command string. The repository is always selected with
``git -C "<path>"`` rather than by changing the process working directory.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar, Mapping, Optional, Type

from pydantic import ValidationError

from git_extended.common.config.config import GIT_EXECUTABLE
from git_extended.common.exception import BuildValidationError
from git_extended.models.request_models import EmptyParameters, OperationParameters
from git_extended.models.types import BuiltCommand, Credentials, Operation
from git_extended.services.git.execution import GitCommandExecutor

logger = logging.getLogger(__name__)

# Characters that keep their special meaning inside a double-quoted shell string
_SHELL_DOUBLE_QUOTE_SPECIALS = ("\\", '"', "$", "`")


@dataclass(frozen=True)
class BuildContext:
    """Everything a builder needs besides its own parameters."""

    repo_path: str
    executor: GitCommandExecutor
    credentials: Optional[Credentials] = None
    item_index: Optional[int] = None


def escape_double_quoted(value: str) -> str:
    """Escape a value for interpolation inside double quotes."""
    for char in _SHELL_DOUBLE_QUOTE_SPECIALS:
        value = value.replace(char, "\\" + char)
    return value


def quote_arg(value: str) -> str:
    """Wrap a value in double quotes, escaping embedded specials."""
    return f'"{escape_double_quoted(value)}"'


def git_command(repo_path: str, *args: str) -> str:
    """Build ``git -C "<repo_path>" <args...>``, dropping empty arguments."""
    parts = [GIT_EXECUTABLE, "-C", quote_arg(repo_path)]
    parts.extend(arg for arg in args if arg)
    return " ".join(parts)


def with_env(command: str, **env: str) -> str:
    """Prefix a command with environment assignments scoped to that invocation."""
    if not env:
        return command
    assignments = " ".join(f"{key}={value}" for key, value in env.items())
    return f"{assignments} {command}"


def and_then(*commands: str) -> str:
    """Chain commands so each runs only if the previous one succeeded."""
    return " && ".join(command for command in commands if command)


def no_op(message: str) -> str:
    """Informational command that always succeeds."""
    return f"echo {quote_arg(message)}"


def optional(value: Optional[str]) -> str:
    """Return the stripped value, or an empty string when it is unset."""
    return value.strip() if value else ""


class CommandBuilder(ABC):
    """Builds the shell command for one operation."""

    operation: ClassVar[Operation]
    parameters_model: ClassVar[Type[OperationParameters]] = EmptyParameters

    def parse_parameters(
        self, raw: Mapping[str, Any], item_index: Optional[int] = None
    ) -> OperationParameters:
        """Validate raw parameters against this operation's model.

        Raises:
            BuildValidationError: If a required value is missing or invalid
        """
        try:
            return self.parameters_model.model_validate(dict(raw))
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(loc) for loc in error['loc']) or 'parameters'}: {error['msg']}"
                for error in e.errors()
            )
            raise BuildValidationError(
                f"Invalid parameters for {self.operation.value}: {problems}", item_index
            )

    async def build_command(self, raw: Mapping[str, Any], context: BuildContext) -> BuiltCommand:
        """Validate parameters and build the command."""
        params = self.parse_parameters(raw, context.item_index)
        built = await self.build(params, context)
        logger.debug(f"Built {self.operation.value} command for {context.repo_path}")
        return built

    @abstractmethod
    async def build(self, params: Any, context: BuildContext) -> BuiltCommand:
        """Build the command from validated parameters."""
        ...
