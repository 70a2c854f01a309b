"""
Shared types for git work item processing.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class Operation(str, Enum):
    CLONE = "clone"
    INIT = "init"
    ADD = "add"
    COMMIT = "commit"
    PUSH = "push"
    PULL = "pull"
    FETCH = "fetch"
    CREATE_BRANCH = "create_branch"
    DELETE_BRANCH = "delete_branch"
    RENAME_BRANCH = "rename_branch"
    CHECKOUT = "checkout"
    SWITCH = "switch"
    MERGE = "merge"
    REBASE = "rebase"
    CHERRY_PICK = "cherry_pick"
    REVERT = "revert"
    RESET = "reset"
    STASH = "stash"
    TAG = "tag"
    APPLY_PATCH = "apply_patch"
    CONFIG_USER = "config_user"
    LIST_BRANCHES = "list_branches"
    LIST_COMMITS = "list_commits"
    STATUS = "status"
    LOG = "log"
    PUSH_LFS = "push_lfs"

    @classmethod
    def from_tag(cls, tag: str) -> Optional["Operation"]:
        """Resolve an operation tag, accepting the host engine's legacy names.

        Returns None when the tag is unknown.
        """
        tag = LEGACY_OPERATION_ALIASES.get(tag, tag)
        try:
            return cls(tag)
        except ValueError:
            return None


LEGACY_OPERATION_ALIASES = {
    "branches": "list_branches",
    "commits": "list_commits",
    "applyPatch": "apply_patch",
    "switchBranch": "switch",
}

# Operations that talk to a remote and may need authentication
REMOTE_OPERATIONS = frozenset(
    {Operation.CLONE, Operation.PUSH, Operation.PULL, Operation.FETCH, Operation.PUSH_LFS}
)


class AuthMode(str, Enum):
    NONE = "none"
    STORED = "stored"
    CUSTOM = "custom"


@dataclass(frozen=True)
class Credentials:
    username: str
    password: str

    def __repr__(self) -> str:
        return f"Credentials(username={self.username!r}, password='***')"


@dataclass(frozen=True)
class BuiltCommand:
    """A shell command ready to run, plus a temp file to delete afterwards."""

    command: str
    temp_file: Optional[str] = None


@dataclass
class ExecutionResult:
    """Outcome of a single command execution.

    ``skipped`` is True when output capture was intentionally disabled; in that
    case stdout and stderr are empty and the payload is ``{}``.
    """

    stdout: str = ""
    stderr: str = ""
    skipped: bool = False

    def to_payload(self) -> Dict[str, Any]:
        if self.skipped:
            return {}
        return {"stdout": self.stdout, "stderr": self.stderr}


class ItemState(str, Enum):
    PENDING = "pending"
    BUILDING = "building"
    EXECUTING = "executing"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
