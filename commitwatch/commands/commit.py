"""
cw commit - Stage, commit and push one bucket of files.
"""

from pathlib import Path

from commitwatch.engine import WatchEngine
from commitwatch.errors import BucketTooLargeError, PushError, PipelineError
from commitwatch.lib.config import WatchConfig
from commitwatch.lib.constants import EXIT_CONFIG, EXIT_ERROR, EXIT_OK, EXIT_PUSH_FAILED


def cmd_commit(args, repo_root: Path, config: WatchConfig) -> int:
    """Commit the listed files as one bucket and push."""
    message = (args.message or "").strip()
    if not message:
        print("ERROR: Commit message required (-m)")
        return EXIT_CONFIG

    engine = WatchEngine(repo_root, config)
    try:
        result = engine.commit_bucket(args.files, message)
    except BucketTooLargeError as e:
        print(f"ERROR: {e}")
        return EXIT_CONFIG
    except PushError as e:
        print(f"WARNING: {e}")
        print("The commit exists locally; push again when the remote is reachable.")
        return EXIT_PUSH_FAILED
    except PipelineError as e:
        print(f"ERROR: {e}")
        return EXIT_ERROR

    for original, staged_as in result.staged.items():
        if original != staged_as:
            print(f"  staged {original} as {staged_as}")
    upstream = " (upstream set)" if result.set_upstream else ""
    print(f"Committed and pushed {len(args.files)} file(s) to {result.branch}{upstream}.")
    if engine.last_indicator:
        print(engine.last_indicator.text)
    return EXIT_OK
