"""
Request models for git work items.

Defines the work item envelope, the authentication union and the typed
parameter set of every operation. Parameter keys are accepted in snake_case
or in the camelCase used by the host workflow engine (``repoPath``,
``commitMessage``, ...).
"""

from typing import Annotated, Any, Dict, Literal, Mapping, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PositiveInt,
    StringConstraints,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from git_extended.common.config.config import GIT_DEFAULT_CREDENTIAL_NAME

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

# Host engine name for the stored credential type
LEGACY_STORED_AUTH_MODE = "gitExtendedApi"


class NoAuthentication(BaseModel):
    """No credentials are injected into remote URLs."""

    mode: Literal["none"] = "none"


class StoredAuthentication(BaseModel):
    """Credentials looked up by name from the host credential store."""

    model_config = ConfigDict(populate_by_name=True)

    mode: Literal["stored"] = "stored"
    credential_name: str = Field(
        default=GIT_DEFAULT_CREDENTIAL_NAME, alias="credentialName"
    )


class CustomAuthentication(BaseModel):
    """Credentials supplied inline with the work item."""

    mode: Literal["custom"] = "custom"
    username: str = ""
    password: str = ""

    def __repr__(self) -> str:
        return f"CustomAuthentication(username={self.username!r}, password='***')"


AuthenticationConfig = Annotated[
    Union[NoAuthentication, StoredAuthentication, CustomAuthentication],
    Field(discriminator="mode"),
]


class WorkItem(BaseModel):
    """One unit of batch input describing a single operation invocation."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    operation: str = Field(..., description="Operation tag selecting the command builder")
    repo_path: str = Field(
        default=".", alias="repoPath", description="Repository the command runs against"
    )
    skip_output: bool = Field(
        default=False, alias="skipOutput", description="Discard stdout/stderr instead of capturing"
    )
    authentication: AuthenticationConfig = Field(default_factory=NoAuthentication)
    parameters: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("repo_path", mode="before")
    @classmethod
    def default_repo_path(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return "."
        return value

    @classmethod
    def from_parameters(cls, bag: Mapping[str, Any]) -> "WorkItem":
        """Build a work item from one flat parameter bag.

        Envelope keys (operation, repository path, skip-output flag and
        authentication) are lifted out; everything else becomes the
        operation's parameters.
        """
        envelope_keys = {
            "operation",
            "repo_path",
            "repoPath",
            "skip_output",
            "skipOutput",
            "authentication",
        }
        parameters = {key: value for key, value in bag.items() if key not in envelope_keys}

        data: Dict[str, Any] = {
            "operation": bag.get("operation"),
            "parameters": parameters,
            "authentication": _normalize_authentication(bag.get("authentication"), parameters),
        }
        for key in ("repo_path", "repoPath"):
            if key in bag:
                data["repo_path"] = bag[key]
        for key in ("skip_output", "skipOutput"):
            if key in bag:
                data["skip_output"] = bag[key]

        return cls.model_validate(data)


def _normalize_authentication(value: Any, parameters: Mapping[str, Any]) -> Any:
    """Turn the host engine's shorthand authentication values into the union shape."""
    if value is None or value == "" or value == "none":
        return {"mode": "none"}

    if isinstance(value, str):
        if value in ("stored", LEGACY_STORED_AUTH_MODE):
            stored: Dict[str, Any] = {"mode": "stored"}
            name = parameters.get("credential_name") or parameters.get("credentialName")
            if name:
                stored["credential_name"] = name
            return stored
        if value == "custom":
            return {
                "mode": "custom",
                "username": parameters.get("username", ""),
                "password": parameters.get("password", ""),
            }
        # Unknown modes fall through to the discriminator and fail validation
        return {"mode": value}

    return value


# ---------------------------------------------------------------------------
# Per-operation parameters
# ---------------------------------------------------------------------------


class OperationParameters(BaseModel):
    """Base class for operation parameter sets."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


class EmptyParameters(OperationParameters):
    pass


class CloneParameters(OperationParameters):
    repo_url: NonEmptyStr
    target_path: str = "."
    skip_lfs_smudge: bool = False


class InitParameters(OperationParameters):
    initial_branch: Optional[str] = None


class AddParameters(OperationParameters):
    files: NonEmptyStr = "."


class CommitParameters(OperationParameters):
    commit_message: NonEmptyStr


class RemoteParameters(OperationParameters):
    remote: Optional[str] = None
    branch: Optional[str] = None


class PushParameters(RemoteParameters):
    force: bool = False
    push_lfs_first: bool = False
    skip_lfs_push: bool = False


class PullParameters(RemoteParameters):
    skip_lfs_smudge: bool = False


class FetchParameters(RemoteParameters):
    prune: bool = False
    skip_lfs_smudge: bool = False


class CreateBranchParameters(OperationParameters):
    branch_name: NonEmptyStr
    start_point: Optional[str] = None


class DeleteBranchParameters(OperationParameters):
    branch_name: NonEmptyStr
    force: bool = False


class RenameBranchParameters(OperationParameters):
    new_name: NonEmptyStr
    current_name: Optional[str] = None


class TargetParameters(OperationParameters):
    target: NonEmptyStr


class SwitchParameters(TargetParameters):
    create: bool = False


class CommitRefParameters(OperationParameters):
    commit_id: NonEmptyStr


class ResetParameters(OperationParameters):
    target: Optional[str] = None


class StashParameters(OperationParameters):
    stash_action: Literal["push", "pop", "apply", "list", "drop"] = "push"
    message: Optional[str] = None


class TagParameters(OperationParameters):
    tag_name: NonEmptyStr
    message: Optional[str] = None
    target: Optional[str] = None


class ApplyPatchParameters(OperationParameters):
    patch_input: Literal["text", "file"] = "text"
    patch_text: Optional[str] = None
    patch_file: Optional[str] = None
    binary: bool = False

    @model_validator(mode="after")
    def check_patch_source(self) -> "ApplyPatchParameters":
        if self.patch_input == "text" and not self.patch_text:
            raise ValueError("patch_text is required when patch_input is 'text'")
        if self.patch_input == "file" and not (self.patch_file and self.patch_file.strip()):
            raise ValueError("patch_file is required when patch_input is 'file'")
        return self


class ConfigUserParameters(OperationParameters):
    user_name: Optional[str] = None
    user_email: Optional[str] = None

    @model_validator(mode="after")
    def check_any_value(self) -> "ConfigUserParameters":
        if not self.user_name and not self.user_email:
            raise ValueError("user_name or user_email is required")
        return self


class ListBranchesParameters(OperationParameters):
    all_branches: bool = False


class LogParameters(OperationParameters):
    max_count: Optional[PositiveInt] = None


class PushLfsParameters(RemoteParameters):
    pass
