"""Exceptions raised by the bucket commit pipeline and engine."""


class PipelineError(Exception):
    """A stage -> commit -> push run failed.

    phase names the pipeline state the run ended in, so callers can tell
    "nothing happened" apart from "committed locally but push failed".
    """

    phase = "failed"

    def __init__(self, message: str):
        super().__init__(message)


class StagingError(PipelineError):
    """One or more files could not be staged under any candidate path."""

    phase = "stage_failed"

    def __init__(self, failed_paths: list[str]):
        self.failed_paths = list(failed_paths)
        super().__init__(
            f"Could not stage: {', '.join(self.failed_paths)}. "
            "Check that paths exist in the workspace."
        )


class CommitError(PipelineError):
    """git commit failed (nothing staged, hook rejected, ...)."""

    phase = "commit_failed"

    def __init__(self, output: str):
        self.output = output
        super().__init__(f"Commit failed: {output}" if output else "Commit failed")


class PushError(PipelineError):
    """Push failed. The commit is kept locally."""

    phase = "push_failed"

    def __init__(self, output: str):
        self.output = output
        detail = f": {output}" if output else ""
        super().__init__(f"Committed locally but push failed{detail}")


class BucketTooLargeError(Exception):
    """A bucket names more files than the configured limit."""

    def __init__(self, count: int, max_files: int):
        self.count = count
        self.max_files = max_files
        super().__init__(f"Bucket limit is {max_files} files; got {count}")
