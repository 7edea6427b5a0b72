"""Git status operations.

Parses `git status --porcelain=v1 -z --untracked-files=all` into
ChangeRecords. Records are rebuilt from git on every call; nothing here is
cached.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from commitwatch.git.runner import GitCommandError, run_git

logger = logging.getLogger(__name__)

# Every untracked file is listed; without -uall a new directory is one entry
STATUS_ARGS = ["status", "--porcelain=v1", "-z", "--untracked-files=all"]
UNTRACKED = "?"


@dataclass(frozen=True)
class ChangeRecord:
    """One changed path in the working tree."""
    path: Path  # absolute
    relative_path: str  # repo-relative, forward slashes
    status_code: str  # two chars, e.g. " M", "A ", "??", "R "
    original_path: Optional[Path] = None  # renames/copies only
    original_relative_path: Optional[str] = None

    @property
    def is_untracked(self) -> bool:
        return self.status_code.startswith(UNTRACKED)

    @property
    def is_rename(self) -> bool:
        return self.original_relative_path is not None


def join_repo_path(repo_root: Path, relative_path: str) -> Path:
    """Join a git-style relative path onto the repo root, one segment at a time."""
    parts = [p for p in relative_path.split("/") if p]
    return Path(repo_root).joinpath(*parts)


def _has_original_path_token(status_code: str) -> bool:
    return "R" in status_code or "C" in status_code


def parse_status(raw: str | bytes, repo_root: Path) -> list[ChangeRecord]:
    """
    Parse NUL-delimited porcelain v1 output.

    Rename and copy entries are followed by an extra token holding the
    original path; it is folded into the same record rather than emitted
    on its own. Malformed tokens are logged and skipped.

    Args:
        raw: Captured stdout of `git status --porcelain=v1 -z`
        repo_root: Repository root used to build absolute paths

    Returns:
        Records in the order git listed them
    """
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="surrogateescape")

    tokens = [t for t in raw.split("\0") if t]
    records = []
    i = 0
    while i < len(tokens):
        token = tokens[i]
        i += 1

        if len(token) < 2:
            logger.warning(f"Skipping malformed status entry: {token!r}")
            continue

        status_code = token[:2]
        # Usually "XY path"; some entries omit the separator
        start = 3 if len(token) > 2 and token[2] == " " else 2
        relative_path = token[start:]
        if not relative_path:
            logger.warning(f"Skipping status entry with no path: {token!r}")
            continue

        original_relative_path = None
        original_path = None
        if _has_original_path_token(status_code) and i < len(tokens):
            original_relative_path = tokens[i]
            original_path = join_repo_path(repo_root, original_relative_path)
            i += 1

        records.append(ChangeRecord(
            path=join_repo_path(repo_root, relative_path),
            relative_path=relative_path,
            status_code=status_code,
            original_path=original_path,
            original_relative_path=original_relative_path,
        ))

    return records


def get_change_set(repo_root: Path) -> list[ChangeRecord]:
    """Query git for the current change set.

    Raises:
        GitCommandError: if git status fails (e.g., not a repository)
    """
    result = run_git(STATUS_ARGS, repo_root)
    if not result.success:
        raise GitCommandError(STATUS_ARGS, result)
    return parse_status(result.stdout, repo_root)


def get_known_changed_paths(records: list[ChangeRecord]) -> set[str]:
    """Relative and absolute string forms of every changed path."""
    known = set()
    for record in records:
        known.add(record.relative_path)
        known.add(str(record.path))
    return known
