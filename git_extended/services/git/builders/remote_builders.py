"""Builders for operations that talk to a remote: clone, push, pull, fetch, LFS push."""

from typing import Optional, Tuple

from git_extended.common.config.config import GIT_DEFAULT_REMOTE
from git_extended.models.request_models import (
    CloneParameters,
    FetchParameters,
    PullParameters,
    PushLfsParameters,
    PushParameters,
)
from git_extended.models.types import BuiltCommand, Credentials, Operation
from git_extended.services.git.builders.base import (
    BuildContext,
    CommandBuilder,
    and_then,
    git_command,
    optional,
    quote_arg,
    with_env,
)
from git_extended.services.git.url_management import authenticate_url

# Scoped environment switches understood by git-lfs
LFS_SKIP_SMUDGE_ENV = "GIT_LFS_SKIP_SMUDGE"
LFS_SKIP_PUSH_ENV = "GIT_LFS_SKIP_PUSH"


def _remote_arg(remote: Optional[str], credentials: Optional[Credentials]) -> str:
    """Authenticate and quote a remote, or return '' to use git's default."""
    remote = optional(remote)
    if not remote:
        return ""
    return quote_arg(authenticate_url(remote, credentials))


def _remote_and_branch(
    remote: Optional[str], branch: Optional[str], credentials: Optional[Credentials]
) -> Tuple[str, str]:
    """Remote and branch arguments; a branch without a remote targets the default remote."""
    remote_arg = _remote_arg(remote, credentials)
    branch_arg = optional(branch)
    if branch_arg and not remote_arg:
        remote_arg = quote_arg(GIT_DEFAULT_REMOTE)
    return remote_arg, branch_arg


def _skip_smudge(command: str, enabled: bool) -> str:
    if enabled:
        return with_env(command, **{LFS_SKIP_SMUDGE_ENV: "1"})
    return command


def lfs_push_command(
    repo_path: str, remote: Optional[str], branch: Optional[str], credentials: Optional[Credentials]
) -> str:
    """``git lfs push --all <remote> [branch]``; LFS always needs an explicit remote."""
    remote_arg = _remote_arg(remote, credentials) or quote_arg(GIT_DEFAULT_REMOTE)
    return git_command(repo_path, "lfs", "push", "--all", remote_arg, optional(branch))


class CloneCommandBuilder(CommandBuilder):
    operation = Operation.CLONE
    parameters_model = CloneParameters

    async def build(self, params: CloneParameters, context: BuildContext) -> BuiltCommand:
        repo_url = authenticate_url(params.repo_url, context.credentials)
        command = git_command(
            context.repo_path, "clone", quote_arg(repo_url), quote_arg(params.target_path or ".")
        )
        return BuiltCommand(_skip_smudge(command, params.skip_lfs_smudge))


class PushCommandBuilder(CommandBuilder):
    operation = Operation.PUSH
    parameters_model = PushParameters

    async def build(self, params: PushParameters, context: BuildContext) -> BuiltCommand:
        remote_arg, branch_arg = _remote_and_branch(params.remote, params.branch, context.credentials)
        command = git_command(
            context.repo_path, "push", "--force" if params.force else "", remote_arg, branch_arg
        )
        if params.skip_lfs_push:
            command = with_env(command, **{LFS_SKIP_PUSH_ENV: "1"})

        if params.push_lfs_first:
            pre_step = lfs_push_command(
                context.repo_path, params.remote, params.branch, context.credentials
            )
            command = and_then(pre_step, command)

        return BuiltCommand(command)


class PullCommandBuilder(CommandBuilder):
    operation = Operation.PULL
    parameters_model = PullParameters

    async def build(self, params: PullParameters, context: BuildContext) -> BuiltCommand:
        remote_arg, branch_arg = _remote_and_branch(params.remote, params.branch, context.credentials)
        command = git_command(context.repo_path, "pull", remote_arg, branch_arg)
        return BuiltCommand(_skip_smudge(command, params.skip_lfs_smudge))


class FetchCommandBuilder(CommandBuilder):
    operation = Operation.FETCH
    parameters_model = FetchParameters

    async def build(self, params: FetchParameters, context: BuildContext) -> BuiltCommand:
        remote_arg, branch_arg = _remote_and_branch(params.remote, params.branch, context.credentials)
        command = git_command(
            context.repo_path, "fetch", "--prune" if params.prune else "", remote_arg, branch_arg
        )
        return BuiltCommand(_skip_smudge(command, params.skip_lfs_smudge))


class PushLfsCommandBuilder(CommandBuilder):
    operation = Operation.PUSH_LFS
    parameters_model = PushLfsParameters

    async def build(self, params: PushLfsParameters, context: BuildContext) -> BuiltCommand:
        return BuiltCommand(
            lfs_push_command(context.repo_path, params.remote, params.branch, context.credentials)
        )
