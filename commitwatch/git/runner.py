"""Git command runner.

Calls block until git exits. There is no timeout unless the caller asks
for one; abandoning a slow check is the caller's business.
"""

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

GIT_BINARY = "git"


@dataclass
class GitResult:
    """Result of a git command."""
    returncode: int
    stdout: str
    stderr: str
    timed_out: bool = False

    @property
    def success(self) -> bool:
        return self.returncode == 0 and not self.timed_out

    @property
    def output(self) -> str:
        """Best human-readable description of what git said."""
        return self.stderr.strip() or self.stdout.strip()


class GitCommandError(Exception):
    """A git command the caller depends on failed."""

    def __init__(self, args: list[str], result: GitResult):
        self.args_list = args
        self.result = result
        detail = result.output or f"exit {result.returncode}"
        super().__init__(f"git {' '.join(args)} failed: {detail}")


def run_git(
    args: list[str],
    cwd: Path,
    timeout: int | None = None,
) -> GitResult:
    """
    Run a git command and capture its output.

    Args:
        args: Git command arguments (e.g., ["status", "--porcelain=v1", "-z"])
        cwd: Repository root the command runs in
        timeout: Optional timeout in seconds

    Returns:
        GitResult with returncode, stdout, stderr, and timed_out flag.
        A missing git binary is reported as returncode 127.
    """
    cmd = [GIT_BINARY, "-C", str(cwd)] + args
    logger.debug(f"Running: {' '.join(cmd)}")
    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            encoding="utf-8",
            errors="surrogateescape",
            timeout=timeout,
        )
        return GitResult(
            returncode=result.returncode,
            stdout=result.stdout,
            stderr=result.stderr,
        )
    except subprocess.TimeoutExpired:
        return GitResult(
            returncode=-1,
            stdout="",
            stderr=f"Command timed out after {timeout}s",
            timed_out=True,
        )
    except OSError as e:
        # git not installed, or cwd vanished
        return GitResult(returncode=127, stdout="", stderr=str(e))
