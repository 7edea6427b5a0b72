"""
Commit size danger classification.

Turns change-set stats and configured limits into a severity and a short
indicator string. Pure functions; no git calls.
"""

import math
from dataclasses import dataclass
from enum import Enum

from commitwatch.git.diff import DiffStats

PROGRESS_BAR_LENGTH = 10
BAR_FILLED = "█"
BAR_EMPTY = "░"
STATUS_SPACE = "·"

STATUS_BAR_TYPES = ("text", "progress", "both")


class Severity(str, Enum):
    """How close the change set is to the configured limits."""
    OK = "ok"
    WARN = "warn"
    CRITICAL = "critical"
    NOT_CONFIGURED = "not_configured"


SEVERITY_ICONS = {
    Severity.OK: "🟢",
    Severity.WARN: "🟡",
    Severity.CRITICAL: "🔴",
    Severity.NOT_CONFIGURED: "🔘",
}

# Rich style names, used by the CLI
SEVERITY_STYLES = {
    Severity.OK: "green",
    Severity.WARN: "yellow",
    Severity.CRITICAL: "bold red",
    Severity.NOT_CONFIGURED: "dim",
}


@dataclass(frozen=True)
class Limits:
    """Size limits for one check. A zero limit disables that dimension."""
    max_files: int
    max_lines: int
    warn_ratio: float

    @property
    def configured(self) -> bool:
        return bool(self.max_files or self.max_lines)


@dataclass(frozen=True)
class Classification:
    severity: Severity
    ratio: float


def _dimension_ratio(value: int, limit: int) -> float:
    if limit <= 0:
        return 0.0
    return value / limit


def danger_ratio(stats: DiffStats, limits: Limits) -> float:
    """max(files/max_files, lines/max_lines), zero limits contributing 0."""
    return max(
        _dimension_ratio(stats.files, limits.max_files),
        _dimension_ratio(stats.lines, limits.max_lines),
    )


def classify(stats: DiffStats, limits: Limits) -> Classification:
    """
    Classify change-set size against limits.

    critical at ratio >= 1.0, warn at ratio >= warn_ratio, otherwise ok.
    Both limits zero yields NOT_CONFIGURED.
    """
    if not limits.configured:
        return Classification(Severity.NOT_CONFIGURED, 0.0)

    ratio = danger_ratio(stats, limits)
    if ratio >= 1.0:
        severity = Severity.CRITICAL
    elif ratio >= limits.warn_ratio:
        severity = Severity.WARN
    else:
        severity = Severity.OK
    return Classification(severity, ratio)


def _clamp(ratio: float) -> float:
    if ratio != ratio:  # NaN
        return 0.0
    return max(0.0, min(1.0, ratio))


def make_progress_bar(ratio: float, length: int = PROGRESS_BAR_LENGTH) -> str:
    """Render ratio (clamped to [0, 1]) as a fixed-length bar, e.g. [████░░░░░░]."""
    filled = math.floor(_clamp(ratio) * length + 0.5)
    return f"[{BAR_FILLED * filled}{BAR_EMPTY * (length - filled)}]"


def percent(ratio: float) -> int:
    return math.floor(_clamp(ratio) * 100 + 0.5)


def format_counts(stats: DiffStats, limits: Limits) -> str:
    return f"{stats.files}/{limits.max_files} f | {stats.lines}/{limits.max_lines} l"


def format_indicator(
    stats: DiffStats,
    limits: Limits,
    classification: Classification,
    mode: str = "progress",
) -> str:
    """Render the one-line size indicator.

    mode is one of "text", "progress" or "both".
    """
    icon = SEVERITY_ICONS[classification.severity]
    if classification.severity == Severity.NOT_CONFIGURED:
        return f"{icon} Bloat: n/a"

    bar = make_progress_bar(classification.ratio)
    pct = percent(classification.ratio)
    if mode == "progress":
        return f"{icon} {bar} {pct}%"
    if mode == "both":
        return f"{icon} {bar} {pct}% {STATUS_SPACE} {format_counts(stats, limits)}"
    return f"{icon} {format_counts(stats, limits)}"


def format_tooltip(stats: DiffStats, limits: Limits) -> str:
    return (
        f"Files changed: {stats.files} / {limits.max_files}\n"
        f"Lines changed: {stats.lines} / {limits.max_lines}"
    )


def format_status_code(status_code: str) -> str:
    """Make the two-char status readable: " M" -> "·M"."""
    return status_code.replace(" ", STATUS_SPACE) or STATUS_SPACE
