"""Git branch operations."""

from pathlib import Path

from commitwatch.git.runner import run_git

DETACHED_HEAD = "HEAD"


def get_current_branch(repo_root: Path) -> str | None:
    """Get the current branch name, or None if detached or unborn."""
    result = run_git(["rev-parse", "--abbrev-ref", "HEAD"], repo_root)
    if not result.success:
        return None
    branch = result.stdout.strip()
    if not branch or branch == DETACHED_HEAD:
        return None
    return branch


def has_upstream(repo_root: Path) -> bool:
    """Check if the current branch has an upstream tracking branch."""
    result = run_git(
        ["rev-parse", "--abbrev-ref", "--symbolic-full-name", "@{u}"],
        repo_root,
    )
    return result.success
