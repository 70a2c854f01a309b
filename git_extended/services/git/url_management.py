"""URL handling and authentication for git remotes.

This module contains functions for:
- Injecting credentials into a remote URL's user-info
- Redacting credentials from commands before they are logged
"""

import logging
import re
from typing import Optional
from urllib.parse import quote, urlsplit, urlunsplit

from git_extended.common.exception import InvalidRemoteUrlError
from git_extended.models.types import Credentials

logger = logging.getLogger(__name__)

_URL_USERINFO_PATTERN = re.compile(r"(?P<scheme>[A-Za-z][A-Za-z0-9+.\-]*://)(?P<userinfo>[^/@\s\"]+)@")


def _looks_like_url(remote: str) -> bool:
    return "://" in remote


def authenticate_url(remote: str, credentials: Optional[Credentials]) -> str:
    """Inject credentials into a remote URL.

    Remote specifiers that are not URLs (local paths, remote names such as
    ``origin``, scp-style ``git@host:repo``) are returned unchanged, as is any
    remote when no credentials are given. Existing user-info is replaced, so
    re-authenticating an authenticated URL never leaks the old pair.

    Note: a credential-bearing remote mistyped as a non-URL is passed through
    unauthenticated; a warning is logged in that case.

    Args:
        remote: Remote URL or specifier
        credentials: Credentials to inject, or None

    Returns:
        The authenticated URL, or the original remote

    Raises:
        InvalidRemoteUrlError: If the remote looks like a URL but cannot be parsed
    """
    if credentials is None or not remote:
        return remote

    if not _looks_like_url(remote):
        logger.warning(
            f"Remote '{redact_credentials(remote)}' is not a URL; credentials for user "
            f"{credentials.username} were not applied"
        )
        return remote

    try:
        parts = urlsplit(remote)
        parts.port  # raises ValueError on a malformed port
    except ValueError as e:
        raise InvalidRemoteUrlError(f"Invalid remote URL '{redact_credentials(remote)}': {e}")

    if parts.scheme == "file":
        return remote

    if not parts.hostname:
        raise InvalidRemoteUrlError(f"Invalid remote URL '{redact_credentials(remote)}': missing host")

    host = parts.netloc.rsplit("@", 1)[-1]
    userinfo = quote(credentials.username, safe="")
    if credentials.password:
        userinfo += ":" + quote(credentials.password, safe="")

    authenticated = urlunsplit(
        (parts.scheme, f"{userinfo}@{host}", parts.path, parts.query, parts.fragment)
    )
    logger.debug(f"Authenticated remote on {parts.hostname} for user {credentials.username}")
    return authenticated


def redact_credentials(text: str) -> str:
    """Replace user-info in every URL inside ``text`` with ``***``."""
    if not text:
        return text
    return _URL_USERINFO_PATTERN.sub(r"\g<scheme>***@", text)
