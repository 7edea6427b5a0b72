"""
cw status - List the uncommitted change set.
"""

from pathlib import Path

from commitwatch.danger import format_status_code
from commitwatch.git.runner import GitCommandError
from commitwatch.git.status import get_change_set
from commitwatch.lib.config import WatchConfig
from commitwatch.lib.constants import EXIT_ERROR, EXIT_OK


def cmd_status(args, repo_root: Path, config: WatchConfig) -> int:
    """Print one line per changed path."""
    try:
        records = get_change_set(repo_root)
    except GitCommandError as e:
        print(f"ERROR: {e}")
        return EXIT_ERROR

    if not records:
        print("No uncommitted changes")
        return EXIT_OK

    for record in records:
        line = f"{format_status_code(record.status_code)}  {record.relative_path}"
        if record.original_relative_path:
            line += f"  (from {record.original_relative_path})"
        print(line)

    print()
    print(f"{len(records)} changed file(s); bucket limit {config.max_files}")
    return EXIT_OK
