from git_extended.processor.git_processor import GitBatchProcessor, run_batch

__all__ = ["GitBatchProcessor", "run_batch"]
