"""
Git credential resolution.

Credentials come either from the host's credential store (looked up by name
through a CredentialProvider) or inline from the work item. Nothing is
cached: every item is resolved on its own.
"""

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Protocol, Union

from git_extended.common.config.config import GIT_CREDENTIALS_FILE
from git_extended.common.exception import CredentialLookupError
from git_extended.models.request_models import (
    AuthenticationConfig,
    CustomAuthentication,
    NoAuthentication,
    StoredAuthentication,
)
from git_extended.models.types import Credentials

logger = logging.getLogger(__name__)


class CredentialProvider(Protocol):
    """Opaque key-value lookup for stored credentials."""

    def get_credentials(self, name: str) -> Optional[Mapping[str, Any]]:
        """Return a ``{"username", "password"}`` record, or None if absent."""
        ...


class InMemoryCredentialProvider:
    """Credential provider backed by a plain mapping."""

    def __init__(self, records: Optional[Mapping[str, Mapping[str, Any]]] = None):
        self._records: Dict[str, Mapping[str, Any]] = dict(records or {})

    def get_credentials(self, name: str) -> Optional[Mapping[str, Any]]:
        return self._records.get(name)


class JsonFileCredentialProvider:
    """Credential provider reading ``{name: {username, password}}`` from a JSON file.

    The file is re-read on every lookup so rotated secrets are picked up
    without restarting.
    """

    def __init__(self, path: Union[str, Path, None] = None):
        path = path or GIT_CREDENTIALS_FILE
        if not path:
            raise ValueError("A credentials file path is required (set GIT_CREDENTIALS_FILE)")
        self.path = Path(path).expanduser()

    def get_credentials(self, name: str) -> Optional[Mapping[str, Any]]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                records = json.load(f)
        except FileNotFoundError:
            logger.warning(f"Credentials file not found: {self.path}")
            return None
        except json.JSONDecodeError as e:
            raise CredentialLookupError(name, f"could not be read: invalid JSON in {self.path} ({e.msg})")

        if not isinstance(records, dict):
            raise CredentialLookupError(name, f"could not be read: {self.path} must contain a JSON object")
        return records.get(name)


class EnvironmentCredentialProvider:
    """Credential provider reading ``GIT_CREDENTIAL_<NAME>_USERNAME`` / ``_PASSWORD``."""

    def __init__(self, prefix: str = "GIT_CREDENTIAL_"):
        self.prefix = prefix

    def _env_key(self, name: str, field: str) -> str:
        normalized = re.sub(r"[^A-Za-z0-9]", "_", name).upper()
        return f"{self.prefix}{normalized}_{field}"

    def get_credentials(self, name: str) -> Optional[Mapping[str, Any]]:
        username = os.getenv(self._env_key(name, "USERNAME"))
        password = os.getenv(self._env_key(name, "PASSWORD"))
        if username is None and password is None:
            return None
        return {"username": username or "", "password": password or ""}


class CredentialResolver:
    """Resolves a work item's authentication config into a Credentials pair."""

    def __init__(self, provider: Optional[CredentialProvider] = None):
        self.provider = provider

    def resolve(
        self, authentication: AuthenticationConfig, item_index: Optional[int] = None
    ) -> Optional[Credentials]:
        """Resolve credentials for one work item.

        Args:
            authentication: The item's authentication config
            item_index: Index of the item, used to annotate errors

        Returns:
            Credentials, or None for the ``none`` mode

        Raises:
            CredentialLookupError: If a stored credential is missing or malformed
        """
        if isinstance(authentication, NoAuthentication):
            return None

        if isinstance(authentication, CustomAuthentication):
            if not authentication.username:
                raise CredentialLookupError("custom", "is missing a username", item_index)
            return Credentials(username=authentication.username, password=authentication.password)

        if isinstance(authentication, StoredAuthentication):
            return self._lookup(authentication.credential_name, item_index)

        raise CredentialLookupError(str(getattr(authentication, "mode", authentication)), "has an unknown mode", item_index)

    def _lookup(self, name: str, item_index: Optional[int]) -> Credentials:
        if self.provider is None:
            raise CredentialLookupError(name, "cannot be looked up: no credential provider configured", item_index)

        record = self.provider.get_credentials(name)
        if record is None:
            raise CredentialLookupError(name, "not found", item_index)

        username = record.get("username")
        password = record.get("password")
        if not isinstance(username, str) or not username:
            raise CredentialLookupError(name, "is missing a username", item_index)
        if password is not None and not isinstance(password, str):
            raise CredentialLookupError(name, "has a non-string password", item_index)

        logger.debug(f"Resolved stored credential '{name}' for user {username}")
        return Credentials(username=username, password=password or "")
