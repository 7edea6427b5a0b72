"""Git commit operations."""

from pathlib import Path

from commitwatch.git.runner import run_git, GitResult


def stage_path(repo_root: Path, path: str) -> GitResult:
    """Stage a single path. Staging an already-staged path is a no-op success."""
    return run_git(["add", "--", path], repo_root)


def commit(repo_root: Path, message: str) -> GitResult:
    """Create a commit with the given message.

    The message is passed as a single argv element, so quotes, backslashes,
    backticks and "$" reach git untouched.
    """
    return run_git(["commit", "-m", message], repo_root)
