"""
Git Extended

Runs git operations for a workflow engine: builds a shell command per work
item, executes it and returns the captured output as structured records.
"""

from git_extended.processor.git_processor import GitBatchProcessor, run_batch

__version__ = "0.1.0"

__all__ = ["GitBatchProcessor", "run_batch", "__version__"]
