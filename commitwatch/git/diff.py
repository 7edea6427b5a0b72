"""Git diff operations.

Line statistics for the change set. Each record is diffed on its own so a
file that vanished or can't be read only drops its own contribution.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from commitwatch.git.paths import to_repo_relative
from commitwatch.git.runner import run_git
from commitwatch.git.status import ChangeRecord, get_change_set

logger = logging.getLogger(__name__)

BINARY_COUNT = "-"


@dataclass
class DiffStats:
    """Aggregate size of the change set."""
    files: int = 0
    lines: int = 0


def parse_numstat(output: str) -> int:
    """Sum added + removed over every `added<TAB>removed<TAB>path` line.

    Binary files report "-" for both counts and contribute 0.
    """
    total = 0
    for line in output.splitlines():
        if not line.strip():
            continue
        fields = line.split("\t")
        if len(fields) < 2:
            continue
        for value in fields[:2]:
            value = value.strip()
            if value == BINARY_COUNT:
                continue
            try:
                total += int(value)
            except ValueError:
                logger.debug(f"Ignoring unparseable numstat count {value!r}")
    return total


def _numstat_args(record: ChangeRecord) -> list[str]:
    if record.is_untracked:
        # Untracked files have nothing in the index; diff against the null device
        return ["diff", "--no-index", "--numstat", os.devnull, "--", str(record.path)]
    return ["diff", "--numstat", "--", record.relative_path]


def count_changed_lines(repo_root: Path, record: ChangeRecord) -> Optional[int]:
    """Added + removed lines for one record, or None if the diff failed."""
    result = run_git(_numstat_args(record), repo_root)
    # --no-index exits 1 when the files differ
    ok = result.success or (record.is_untracked and result.returncode == 1 and not result.timed_out)
    if not ok:
        logger.debug(f"Skipping {record.relative_path} in diff stats: {result.output}")
        return None
    return parse_numstat(result.stdout)


def compute_diff_stats(repo_root: Path, records: list[ChangeRecord]) -> DiffStats:
    """Compute file and line counts for a change set.

    files always equals len(records), whatever happens to the per-file diffs.
    """
    lines = 0
    for record in records:
        count = count_changed_lines(repo_root, record)
        if count is not None:
            lines += count
    return DiffStats(files=len(records), lines=lines)


def get_diff_stats(repo_root: Path) -> DiffStats:
    """Query the change set and compute its stats.

    Raises:
        GitCommandError: if the status query fails
    """
    return compute_diff_stats(repo_root, get_change_set(repo_root))


def has_head_version(repo_root: Path, path: str) -> bool:
    """Check whether path exists in the HEAD tree."""
    rel = to_repo_relative(repo_root, path)
    result = run_git(["ls-tree", "--name-only", "HEAD", "--", rel], repo_root)
    return result.success and bool(result.stdout.strip())


def get_bucket_diff(repo_root: Path, files: list[str]) -> str:
    """Unified diff of the given files against the index. Empty on failure."""
    rel_files = [to_repo_relative(repo_root, f) for f in files]
    if not rel_files:
        return ""
    result = run_git(["diff", "--no-color", "--"] + rel_files, repo_root)
    if not result.success:
        logger.debug(f"Bucket diff failed: {result.output}")
        return ""
    return result.stdout


@dataclass
class DiffPreview:
    """What a side-by-side preview of one file should compare."""
    path: str
    head_path: str
    is_new: bool
    is_deleted: bool
    base_exists: bool


def describe_preview(
    repo_root: Path,
    path: str,
    status: str = "",
    original_path: Optional[str] = None,
) -> DiffPreview:
    """
    Work out both sides of a HEAD <-> working tree preview.

    Renames compare against the original path in HEAD. New files have no
    HEAD side; deleted files have no working-tree side.
    """
    code = status.strip()
    is_new = code.startswith("?") or code.startswith("A")
    is_deleted = code.startswith("D")
    head_path = to_repo_relative(repo_root, original_path or path)
    base_exists = False if is_new else has_head_version(repo_root, head_path)
    return DiffPreview(
        path=to_repo_relative(repo_root, path),
        head_path=head_path,
        is_new=is_new,
        is_deleted=is_deleted,
        base_exists=base_exists,
    )
