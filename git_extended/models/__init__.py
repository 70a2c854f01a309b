from git_extended.models.request_models import (
    AuthenticationConfig,
    CustomAuthentication,
    NoAuthentication,
    StoredAuthentication,
    WorkItem,
)
from git_extended.models.types import (
    AuthMode,
    BuiltCommand,
    Credentials,
    ExecutionResult,
    Operation,
)

__all__ = [
    "AuthMode",
    "AuthenticationConfig",
    "BuiltCommand",
    "Credentials",
    "CustomAuthentication",
    "ExecutionResult",
    "NoAuthentication",
    "Operation",
    "StoredAuthentication",
    "WorkItem",
]
