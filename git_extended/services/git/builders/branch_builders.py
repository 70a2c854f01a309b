"""Builders for branch and history operations."""

from git_extended.models.request_models import (
    CommitRefParameters,
    CreateBranchParameters,
    DeleteBranchParameters,
    ListBranchesParameters,
    RenameBranchParameters,
    ResetParameters,
    SwitchParameters,
    TargetParameters,
)
from git_extended.models.types import BuiltCommand, Operation
from git_extended.services.git.builders.base import (
    BuildContext,
    CommandBuilder,
    git_command,
    optional,
)

DEFAULT_RESET_TARGET = "HEAD"


class CreateBranchCommandBuilder(CommandBuilder):
    operation = Operation.CREATE_BRANCH
    parameters_model = CreateBranchParameters

    async def build(self, params: CreateBranchParameters, context: BuildContext) -> BuiltCommand:
        return BuiltCommand(
            git_command(context.repo_path, "branch", params.branch_name, optional(params.start_point))
        )


class DeleteBranchCommandBuilder(CommandBuilder):
    operation = Operation.DELETE_BRANCH
    parameters_model = DeleteBranchParameters

    async def build(self, params: DeleteBranchParameters, context: BuildContext) -> BuiltCommand:
        flag = "-D" if params.force else "-d"
        return BuiltCommand(git_command(context.repo_path, "branch", flag, params.branch_name))


class RenameBranchCommandBuilder(CommandBuilder):
    """Renames ``current_name`` (or the checked-out branch) to ``new_name``."""

    operation = Operation.RENAME_BRANCH
    parameters_model = RenameBranchParameters

    async def build(self, params: RenameBranchParameters, context: BuildContext) -> BuiltCommand:
        return BuiltCommand(
            git_command(context.repo_path, "branch", "-m", optional(params.current_name), params.new_name)
        )


class ListBranchesCommandBuilder(CommandBuilder):
    operation = Operation.LIST_BRANCHES
    parameters_model = ListBranchesParameters

    async def build(self, params: ListBranchesParameters, context: BuildContext) -> BuiltCommand:
        return BuiltCommand(
            git_command(context.repo_path, "branch", "--all" if params.all_branches else "")
        )


class _TargetCommandBuilder(CommandBuilder):
    """``git <subcommand> <target>`` for checkout, merge and rebase."""

    parameters_model = TargetParameters
    subcommand: str

    async def build(self, params: TargetParameters, context: BuildContext) -> BuiltCommand:
        return BuiltCommand(git_command(context.repo_path, self.subcommand, params.target))


class CheckoutCommandBuilder(_TargetCommandBuilder):
    operation = Operation.CHECKOUT
    subcommand = "checkout"


class MergeCommandBuilder(_TargetCommandBuilder):
    operation = Operation.MERGE
    subcommand = "merge"


class RebaseCommandBuilder(_TargetCommandBuilder):
    operation = Operation.REBASE
    subcommand = "rebase"


class SwitchCommandBuilder(CommandBuilder):
    operation = Operation.SWITCH
    parameters_model = SwitchParameters

    async def build(self, params: SwitchParameters, context: BuildContext) -> BuiltCommand:
        return BuiltCommand(
            git_command(context.repo_path, "switch", "-c" if params.create else "", params.target)
        )


class CherryPickCommandBuilder(CommandBuilder):
    operation = Operation.CHERRY_PICK
    parameters_model = CommitRefParameters

    async def build(self, params: CommitRefParameters, context: BuildContext) -> BuiltCommand:
        return BuiltCommand(git_command(context.repo_path, "cherry-pick", params.commit_id))


class RevertCommandBuilder(CommandBuilder):
    operation = Operation.REVERT
    parameters_model = CommitRefParameters

    async def build(self, params: CommitRefParameters, context: BuildContext) -> BuiltCommand:
        # --no-edit keeps git from opening an editor for the revert message
        return BuiltCommand(git_command(context.repo_path, "revert", "--no-edit", params.commit_id))


class ResetCommandBuilder(CommandBuilder):
    """Hard reset to ``target``, or to HEAD when no target is given."""

    operation = Operation.RESET
    parameters_model = ResetParameters

    async def build(self, params: ResetParameters, context: BuildContext) -> BuiltCommand:
        target = optional(params.target) or DEFAULT_RESET_TARGET
        return BuiltCommand(git_command(context.repo_path, "reset", "--hard", target))

