"""
cw diff - Show the diff for a bucket of files.
"""

from pathlib import Path

from commitwatch.git.diff import get_bucket_diff
from commitwatch.lib.config import WatchConfig
from commitwatch.lib.constants import EXIT_OK


def cmd_diff(args, repo_root: Path, config: WatchConfig) -> int:
    """Print the unified diff of the given files."""
    diff = get_bucket_diff(repo_root, args.files)
    if diff.strip():
        print(diff)
    else:
        print("No unstaged changes in these files")
    return EXIT_OK
