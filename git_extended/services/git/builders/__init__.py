"""
Command builders, one per operation, registered in a static table.
"""

from typing import Dict, Optional

from git_extended.models.types import Operation
from git_extended.services.git.builders.base import BuildContext, CommandBuilder
from git_extended.services.git.builders.branch_builders import (
    CheckoutCommandBuilder,
    CherryPickCommandBuilder,
    CreateBranchCommandBuilder,
    DeleteBranchCommandBuilder,
    ListBranchesCommandBuilder,
    MergeCommandBuilder,
    RebaseCommandBuilder,
    RenameBranchCommandBuilder,
    ResetCommandBuilder,
    RevertCommandBuilder,
    SwitchCommandBuilder,
)
from git_extended.services.git.builders.remote_builders import (
    CloneCommandBuilder,
    FetchCommandBuilder,
    PullCommandBuilder,
    PushCommandBuilder,
    PushLfsCommandBuilder,
)
from git_extended.services.git.builders.repository_builders import (
    AddCommandBuilder,
    ApplyPatchCommandBuilder,
    CommitCommandBuilder,
    ConfigUserCommandBuilder,
    InitCommandBuilder,
    ListCommitsCommandBuilder,
    LogCommandBuilder,
    StashCommandBuilder,
    StatusCommandBuilder,
    TagCommandBuilder,
)

COMMAND_BUILDERS: Dict[Operation, CommandBuilder] = {
    builder.operation: builder
    for builder in (
        CloneCommandBuilder(),
        InitCommandBuilder(),
        AddCommandBuilder(),
        CommitCommandBuilder(),
        PushCommandBuilder(),
        PullCommandBuilder(),
        FetchCommandBuilder(),
        CreateBranchCommandBuilder(),
        DeleteBranchCommandBuilder(),
        RenameBranchCommandBuilder(),
        CheckoutCommandBuilder(),
        SwitchCommandBuilder(),
        MergeCommandBuilder(),
        RebaseCommandBuilder(),
        CherryPickCommandBuilder(),
        RevertCommandBuilder(),
        ResetCommandBuilder(),
        StashCommandBuilder(),
        TagCommandBuilder(),
        ApplyPatchCommandBuilder(),
        ConfigUserCommandBuilder(),
        ListBranchesCommandBuilder(),
        ListCommitsCommandBuilder(),
        StatusCommandBuilder(),
        LogCommandBuilder(),
        PushLfsCommandBuilder(),
    )
}


def get_builder(operation: Operation) -> Optional[CommandBuilder]:
    """Return the registered builder for an operation, or None."""
    return COMMAND_BUILDERS.get(operation)


__all__ = [
    "BuildContext",
    "COMMAND_BUILDERS",
    "CommandBuilder",
    "get_builder",
]
