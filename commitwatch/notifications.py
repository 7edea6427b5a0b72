"""
Desktop alerts for an oversized change set.

Sent through notify-send, so any freedesktop notification daemon shows them.
Machines without notify-send get a debug log line instead.
"""

import subprocess
import shutil
import logging

from commitwatch.git.diff import DiffStats

logger = logging.getLogger(__name__)

APP_NAME = "commitwatch"
NOTIFY_TIMEOUT = 5  # seconds


def notify(title: str, message: str, urgency: str = "normal"):
    """Show one desktop notification; failures are logged, never raised."""
    if not shutil.which("notify-send"):
        logger.debug(f"notify-send not found; not showing '{title}'")
        return

    cmd = ["notify-send", "--urgency", urgency, "--app-name", APP_NAME, title, message]
    try:
        result = subprocess.run(cmd, capture_output=True, text=True, timeout=NOTIFY_TIMEOUT)
    except subprocess.TimeoutExpired:
        logger.warning("notify-send timed out")
        return
    except OSError as e:
        logger.warning(f"Could not run notify-send: {e}")
        return

    if result.returncode != 0:
        logger.warning(f"notify-send exited {result.returncode}: {result.stderr.strip()}")


def notify_size_exceeded(stats: DiffStats):
    """Tell the user the uncommitted change set is over its limits."""
    notify(
        "Commit size exceeded!",
        f"{stats.files} files changed, {stats.lines} lines. "
        "Consider committing or splitting your changes.",
        "critical",
    )
