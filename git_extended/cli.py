#!/usr/bin/env python3
"""
Git Extended CLI

Runs a batch of git work items described as JSON and prints the results.

Example:
    echo '[{"operation": "status", "repoPath": "."}]' | git-extended -
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import List, Optional

from git_extended.common.config.config import (
    APP_LOG_FILE,
    GIT_CREDENTIALS_FILE,
    LOG_FORMAT,
    LOG_LEVEL,
)
from git_extended.common.exception import GitExtendedError
from git_extended.processor.git_processor import GitBatchProcessor
from git_extended.services.git.credentials import (
    CredentialProvider,
    EnvironmentCredentialProvider,
    JsonFileCredentialProvider,
)

logger = logging.getLogger(__name__)


def configure_logging(level: str = LOG_LEVEL, log_file: Optional[str] = APP_LOG_FILE) -> None:
    """Log to stderr, and to a file when one is configured."""
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="a"))

    logging.basicConfig(level=level.upper(), format=LOG_FORMAT, handlers=handlers, force=True)


def load_items(source: str) -> list:
    """Load the JSON work item list from a file path, or stdin for '-'."""
    if source == "-":
        data = json.load(sys.stdin)
    else:
        with open(source, "r", encoding="utf-8") as f:
            data = json.load(f)

    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list):
        raise ValueError("Work items must be a JSON object or a list of objects")
    return data


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="git-extended",
        description="Run git operations described as JSON work items",
    )
    parser.add_argument(
        "items",
        help="Path to a JSON file with work items, or '-' to read from stdin",
    )
    parser.add_argument(
        "--continue-on-fail",
        action="store_true",
        help="Record failed items and continue instead of aborting the batch",
    )
    parser.add_argument(
        "--credentials-file",
        default=GIT_CREDENTIALS_FILE,
        help="JSON file mapping credential names to {username, password} "
        "(default: GIT_CREDENTIALS_FILE; falls back to GIT_CREDENTIAL_<NAME>_* env vars)",
    )
    parser.add_argument(
        "--log-level",
        default=LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Logging level (default: %(default)s)",
    )
    parser.add_argument(
        "--indent",
        type=int,
        default=2,
        help="Indentation of the JSON output (default: %(default)s)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the git-extended command."""
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    try:
        items = load_items(args.items)
    except (OSError, ValueError) as e:
        logger.error(f"Could not load work items: {e}")
        return 2

    provider: CredentialProvider
    if args.credentials_file:
        provider = JsonFileCredentialProvider(args.credentials_file)
    else:
        provider = EnvironmentCredentialProvider()

    processor = GitBatchProcessor(credential_provider=provider)
    try:
        results = asyncio.run(processor.process(items, continue_on_fail=args.continue_on_fail))
    except GitExtendedError as e:
        print(json.dumps({"error": e.message, "item_index": e.item_index}, indent=args.indent))
        return 1

    print(json.dumps(results, indent=args.indent))
    return 0


if __name__ == "__main__":
    sys.exit(main())
