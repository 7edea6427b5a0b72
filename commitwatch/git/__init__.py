"""Git operations for commitwatch.

Thin wrappers over the git CLI. Everything goes through run_git.

Return type conventions:
- Functions returning GitResult: Caller must check .success before using output.
  Examples: stage_path(), commit(), push()
- Functions returning bool: True on success/condition met, False otherwise.
  Examples: has_upstream(), has_head_version()
- Functions returning parsed values: get_change_set() raises GitCommandError
  when git status itself fails; per-file diff failures are skipped, never raised.
"""

from commitwatch.git.runner import GitCommandError, GitResult, run_git
from commitwatch.git.status import (
    ChangeRecord,
    parse_status,
    get_change_set,
    get_known_changed_paths,
)
from commitwatch.git.diff import (
    DiffStats,
    DiffPreview,
    parse_numstat,
    compute_diff_stats,
    get_diff_stats,
    has_head_version,
    get_bucket_diff,
    describe_preview,
)
from commitwatch.git.paths import (
    resolve_path,
    staging_candidates,
    to_repo_relative,
)
from commitwatch.git.branch import (
    get_current_branch,
    has_upstream,
)
from commitwatch.git.commit import (
    stage_path,
    commit,
)
from commitwatch.git.remote import (
    DEFAULT_REMOTE,
    push,
    push_set_upstream,
)

__all__ = [
    # runner
    "GitCommandError",
    "GitResult",
    "run_git",
    # status
    "ChangeRecord",
    "parse_status",
    "get_change_set",
    "get_known_changed_paths",
    # diff
    "DiffStats",
    "DiffPreview",
    "parse_numstat",
    "compute_diff_stats",
    "get_diff_stats",
    "has_head_version",
    "get_bucket_diff",
    "describe_preview",
    # paths
    "resolve_path",
    "staging_candidates",
    "to_repo_relative",
    # branch
    "get_current_branch",
    "has_upstream",
    # commit
    "stage_path",
    "commit",
    # remote
    "DEFAULT_REMOTE",
    "push",
    "push_set_upstream",
]
