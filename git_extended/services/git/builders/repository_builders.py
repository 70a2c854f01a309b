"""Builders for working-tree and repository operations.

This module contains builders for:
- init, add, commit (with automatic staging)
- status, log, commit listing
- stash and tag
- patch application and local user configuration
"""

import logging

from git_extended.models.request_models import (
    AddParameters,
    ApplyPatchParameters,
    CommitParameters,
    ConfigUserParameters,
    EmptyParameters,
    InitParameters,
    LogParameters,
    StashParameters,
    TagParameters,
)
from git_extended.models.types import BuiltCommand, Operation
from git_extended.services.git.builders.base import (
    BuildContext,
    CommandBuilder,
    and_then,
    git_command,
    no_op,
    optional,
    quote_arg,
)
from git_extended.services.git.temp_files import write_temp_patch

logger = logging.getLogger(__name__)

NO_CHANGES_TO_COMMIT_MSG = "No changes to commit"


def _max_count_args(max_count) -> str:
    return f"-n {max_count}" if max_count else ""


class InitCommandBuilder(CommandBuilder):
    operation = Operation.INIT
    parameters_model = InitParameters

    async def build(self, params: InitParameters, context: BuildContext) -> BuiltCommand:
        branch = optional(params.initial_branch)
        return BuiltCommand(
            git_command(context.repo_path, "init", f"-b {quote_arg(branch)}" if branch else "")
        )


class AddCommandBuilder(CommandBuilder):
    operation = Operation.ADD
    parameters_model = AddParameters

    async def build(self, params: AddParameters, context: BuildContext) -> BuiltCommand:
        return BuiltCommand(git_command(context.repo_path, "add", params.files))


class CommitCommandBuilder(CommandBuilder):
    """Commits every pending change, staging it first.

    The working tree is inspected before the command is built. When there is
    nothing to commit, either before or after staging, an informational
    no-op is returned instead so the item does not fail.
    """

    operation = Operation.COMMIT
    parameters_model = CommitParameters

    async def build(self, params: CommitParameters, context: BuildContext) -> BuiltCommand:
        executor = context.executor
        repo_path = context.repo_path

        status = await executor.run_captured(git_command(repo_path, "status", "--porcelain"))
        if not status.stdout:
            logger.info(f"{NO_CHANGES_TO_COMMIT_MSG} in {repo_path}")
            return BuiltCommand(no_op(NO_CHANGES_TO_COMMIT_MSG))

        # Stage tracked modifications, deletions and untracked files
        await executor.run_captured(git_command(repo_path, "add", "-A"))

        staged = await executor.run_captured(git_command(repo_path, "diff", "--cached", "--name-only"))
        if not staged.stdout:
            logger.info(f"{NO_CHANGES_TO_COMMIT_MSG} in {repo_path} after staging")
            return BuiltCommand(no_op(NO_CHANGES_TO_COMMIT_MSG))

        return BuiltCommand(
            git_command(repo_path, "commit", "-m", quote_arg(params.commit_message))
        )


class StatusCommandBuilder(CommandBuilder):
    operation = Operation.STATUS
    parameters_model = EmptyParameters

    async def build(self, params: EmptyParameters, context: BuildContext) -> BuiltCommand:
        return BuiltCommand(git_command(context.repo_path, "status"))


class LogCommandBuilder(CommandBuilder):
    operation = Operation.LOG
    parameters_model = LogParameters

    async def build(self, params: LogParameters, context: BuildContext) -> BuiltCommand:
        return BuiltCommand(git_command(context.repo_path, "log", _max_count_args(params.max_count)))


class ListCommitsCommandBuilder(CommandBuilder):
    operation = Operation.LIST_COMMITS
    parameters_model = LogParameters

    async def build(self, params: LogParameters, context: BuildContext) -> BuiltCommand:
        return BuiltCommand(
            git_command(context.repo_path, "log", "--oneline", _max_count_args(params.max_count))
        )


class StashCommandBuilder(CommandBuilder):
    operation = Operation.STASH
    parameters_model = StashParameters

    async def build(self, params: StashParameters, context: BuildContext) -> BuiltCommand:
        message = optional(params.message)
        message_args = ""
        if params.stash_action == "push" and message:
            message_args = f"-m {quote_arg(message)}"
        return BuiltCommand(git_command(context.repo_path, "stash", params.stash_action, message_args))


class TagCommandBuilder(CommandBuilder):
    """Lightweight tag, or an annotated tag when a message is given."""

    operation = Operation.TAG
    parameters_model = TagParameters

    async def build(self, params: TagParameters, context: BuildContext) -> BuiltCommand:
        message = optional(params.message)
        if message:
            tag_args = f"-a {params.tag_name} -m {quote_arg(message)}"
        else:
            tag_args = params.tag_name
        return BuiltCommand(git_command(context.repo_path, "tag", tag_args, optional(params.target)))


class ApplyPatchCommandBuilder(CommandBuilder):
    """Applies a patch file, writing inline patch text to a temp file first.

    The temp file path is returned with the command; the caller owns its
    deletion.
    """

    operation = Operation.APPLY_PATCH
    parameters_model = ApplyPatchParameters

    async def build(self, params: ApplyPatchParameters, context: BuildContext) -> BuiltCommand:
        temp_file = None
        if params.patch_input == "text":
            temp_file = await write_temp_patch(params.patch_text)
            patch_file = temp_file
        else:
            patch_file = params.patch_file.strip()

        command = git_command(
            context.repo_path, "apply", "--binary" if params.binary else "", quote_arg(patch_file)
        )
        return BuiltCommand(command, temp_file=temp_file)


class ConfigUserCommandBuilder(CommandBuilder):
    """Sets the repository-local user.name and/or user.email."""

    operation = Operation.CONFIG_USER
    parameters_model = ConfigUserParameters

    async def build(self, params: ConfigUserParameters, context: BuildContext) -> BuiltCommand:
        commands = []
        if params.user_name:
            commands.append(
                git_command(context.repo_path, "config", "user.name", quote_arg(params.user_name))
            )
        if params.user_email:
            commands.append(
                git_command(context.repo_path, "config", "user.email", quote_arg(params.user_email))
            )
        return BuiltCommand(and_then(*commands))
