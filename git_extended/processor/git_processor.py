"""
Git Batch Processor

Runs a batch of git work items strictly one after another, in input order:
- resolves the operation and its command builder
- resolves credentials for remote operations
- builds and executes the command, cleaning up temporary files
- isolates failures per item (continue-on-fail) or aborts the batch
"""

import asyncio
import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from pydantic import ValidationError

from git_extended.common.exception import (
    BuildValidationError,
    GitExtendedError,
    ItemProcessingError,
    UnsupportedOperationError,
)
from git_extended.models.request_models import WorkItem
from git_extended.models.types import REMOTE_OPERATIONS, ExecutionResult, ItemState, Operation
from git_extended.services.git.builders import COMMAND_BUILDERS, BuildContext, CommandBuilder
from git_extended.services.git.credentials import CredentialProvider, CredentialResolver
from git_extended.services.git.execution import GitCommandExecutor
from git_extended.services.git.temp_files import TemporaryResource

logger = logging.getLogger(__name__)

WorkItemInput = Union[WorkItem, Mapping[str, Any]]


class GitBatchProcessor:
    """Processes a batch of git work items."""

    def __init__(
        self,
        credential_provider: Optional[CredentialProvider] = None,
        executor: Optional[GitCommandExecutor] = None,
        builders: Optional[Mapping[Operation, CommandBuilder]] = None,
    ):
        """Initialize the processor.

        Args:
            credential_provider: Lookup for stored credentials
            executor: Command executor (defaults to a GitCommandExecutor)
            builders: Builder table keyed by operation (defaults to all builders)
        """
        self.credential_resolver = CredentialResolver(credential_provider)
        self.executor = executor or GitCommandExecutor()
        self.builders = dict(builders if builders is not None else COMMAND_BUILDERS)

    async def process(
        self, items: Sequence[WorkItemInput], continue_on_fail: bool = False
    ) -> List[Dict[str, Any]]:
        """Process every item in order.

        Args:
            items: Work items or flat parameter bags
            continue_on_fail: Record failures and keep going instead of aborting

        Returns:
            One payload per item, in input order: ``{"stdout", "stderr"}``,
            ``{}`` when output was skipped, or ``{"error", "item_index"}``

        Raises:
            GitExtendedError: The first item failure, annotated with its index,
                when continue_on_fail is False
        """
        logger.info(f"Processing {len(items)} git work item(s) (continue_on_fail={continue_on_fail})")
        results: List[Dict[str, Any]] = []

        for index, raw_item in enumerate(items):
            try:
                result = await self.process_item(raw_item, index)
                results.append(result.to_payload())
            except Exception as e:
                _log_state(index, ItemState.FAILED)
                error = _annotate(e, index)
                if not continue_on_fail:
                    logger.error(f"Aborting batch at item {index}: {error.message}")
                    if error is e:
                        raise
                    raise error from e

                logger.warning(f"Item {index} failed, continuing: {error.message}")
                payload: Dict[str, Any] = {"error": error.message, "item_index": index}
                if error.cleanup_error is not None:
                    payload["cleanup_error"] = error.cleanup_error.message
                results.append(payload)

        return results

    async def process_item(self, raw_item: WorkItemInput, index: int) -> ExecutionResult:
        """Build and execute a single work item.

        Args:
            raw_item: Work item or flat parameter bag
            index: Position of the item in the batch

        Returns:
            ExecutionResult of the item's command
        """
        _log_state(index, ItemState.PENDING)
        item = _to_work_item(raw_item, index)

        operation = Operation.from_tag(item.operation)
        builder = self.builders.get(operation) if operation is not None else None
        if builder is None:
            raise UnsupportedOperationError(item.operation, index)

        _log_state(index, ItemState.BUILDING, operation.value)
        credentials = None
        if operation in REMOTE_OPERATIONS:
            credentials = self.credential_resolver.resolve(item.authentication, index)

        context = BuildContext(
            repo_path=item.repo_path,
            executor=self.executor,
            credentials=credentials,
            item_index=index,
        )
        built = await builder.build_command(item.parameters, context)

        _log_state(index, ItemState.EXECUTING, operation.value)
        async with TemporaryResource(built.temp_file, index):
            result = await self.executor.run(built.command, capture_output=not item.skip_output)

        _log_state(index, ItemState.SUCCEEDED, operation.value)
        return result


def _to_work_item(raw_item: WorkItemInput, index: int) -> WorkItem:
    if isinstance(raw_item, WorkItem):
        return raw_item
    if not isinstance(raw_item, Mapping):
        raise BuildValidationError(
            f"Work item must be a mapping, got {type(raw_item).__name__}", index
        )
    try:
        return WorkItem.from_parameters(raw_item)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(loc) for loc in error['loc'])}: {error['msg']}" for error in e.errors()
        )
        raise BuildValidationError(f"Invalid work item: {problems}", index)


def _annotate(error: Exception, index: int) -> GitExtendedError:
    """Attach the failing item's index, wrapping foreign exceptions."""
    if isinstance(error, GitExtendedError):
        error.item_index = index
        return error
    return ItemProcessingError(str(error) or error.__class__.__name__, index)


def _log_state(index: int, state: ItemState, operation: Optional[str] = None) -> None:
    label = f" ({operation})" if operation else ""
    logger.debug(f"Item {index}{label} -> {state.value}")


def run_batch(
    items: Sequence[WorkItemInput],
    continue_on_fail: bool = False,
    credential_provider: Optional[CredentialProvider] = None,
    executor: Optional[GitCommandExecutor] = None,
) -> List[Dict[str, Any]]:
    """Synchronous wrapper around GitBatchProcessor.process."""
    processor = GitBatchProcessor(credential_provider=credential_provider, executor=executor)
    return asyncio.run(processor.process(items, continue_on_fail=continue_on_fail))
