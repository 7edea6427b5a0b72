"""Git remote operations."""

from pathlib import Path

from commitwatch.git.runner import run_git, GitResult

DEFAULT_REMOTE = "origin"


def push(repo_root: Path) -> GitResult:
    """Push to the configured upstream."""
    return run_git(["push"], repo_root)


def push_set_upstream(repo_root: Path, remote: str, branch: str) -> GitResult:
    """Push and set upstream tracking."""
    return run_git(["push", "--set-upstream", remote, branch], repo_root)
