"""Watch engine: one instance per workspace.

Owns the configuration and the in-flight guard for size checks. Checks
can be triggered by the periodic poller, by a save, or explicitly; at most
one runs at a time and triggers that arrive meanwhile are dropped rather
than queued. Bucket commits are not serialized against checks; a check
after a commit simply re-reads git.
"""

import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from commitwatch.danger import (
    Classification,
    Severity,
    classify,
    format_indicator,
    format_tooltip,
)
from commitwatch.errors import BucketTooLargeError
from commitwatch.git.diff import DiffPreview, DiffStats, describe_preview, get_diff_stats
from commitwatch.git.runner import GitCommandError
from commitwatch.git.status import ChangeRecord, get_change_set
from commitwatch.lib.config import WatchConfig
from commitwatch.messages import (
    ChangesRequest,
    CommitRequest,
    PreviewRequest,
    RefreshRequest,
    parse_request,
)
from commitwatch.notifications import notify_size_exceeded
from commitwatch.pipeline import PipelineResult, StagingPipeline

logger = logging.getLogger(__name__)

UNAVAILABLE_TEXT = "🔘 Bloat: n/a"


@dataclass
class Indicator:
    """Result of one size check."""
    text: str
    severity: Severity
    ratio: float = 0.0
    stats: Optional[DiffStats] = None
    tooltip: str = ""
    available: bool = True


class WatchEngine:
    """Size checks and bucket commits for one repository."""

    def __init__(
        self,
        repo_root: Path,
        config: Optional[WatchConfig] = None,
        on_update: Optional[Callable[[Indicator], None]] = None,
        notifier: Callable[[DiffStats], None] = notify_size_exceeded,
    ):
        self.repo_root = Path(repo_root)
        self.config = config or WatchConfig()
        self.on_update = on_update
        self.notifier = notifier
        self.last_indicator: Optional[Indicator] = None

        self._check_lock = threading.Lock()
        self._stop = threading.Event()
        self._poller: Optional[threading.Thread] = None

    @property
    def in_flight(self) -> bool:
        return self._check_lock.locked()

    def update_config(self, config: WatchConfig) -> Optional[Indicator]:
        """Swap in new settings and re-check with them.

        The poller picks up a new poll_interval after its current wait.
        """
        self.config = config
        logger.info(
            f"Config updated: max_files={config.max_files}, max_lines={config.max_lines}, "
            f"warn_ratio={config.warn_ratio}"
        )
        return self.refresh()

    # ------------------------------------------------------------------
    # Size checks
    # ------------------------------------------------------------------

    def refresh(self, alert: bool = False) -> Optional[Indicator]:
        """
        Run one size check.

        Args:
            alert: send a desktop notification if the change set is over limits

        Returns:
            The new Indicator, or None if another check was already running
        """
        if not self._check_lock.acquire(blocking=False):
            logger.debug("Size check already in flight; dropping trigger")
            return None
        try:
            indicator = self._check(alert)
        finally:
            self._check_lock.release()

        self.last_indicator = indicator
        if self.on_update:
            self.on_update(indicator)
        return indicator

    def _check(self, alert: bool) -> Indicator:
        config = self.config
        limits = config.limits

        if not limits.configured:
            return Indicator(
                text=UNAVAILABLE_TEXT,
                severity=Severity.NOT_CONFIGURED,
                tooltip="No limits configured",
            )

        try:
            stats = get_diff_stats(self.repo_root)
        except GitCommandError as e:
            logger.debug(f"Size check unavailable: {e}")
            return Indicator(
                text=UNAVAILABLE_TEXT,
                severity=Severity.NOT_CONFIGURED,
                tooltip=str(e),
                available=False,
            )

        classification: Classification = classify(stats, limits)
        logger.debug(
            f"Size check: {stats.files} files, {stats.lines} lines, "
            f"ratio {classification.ratio:.2f} ({classification.severity.value})"
        )

        if alert and classification.severity == Severity.CRITICAL:
            self.notifier(stats)

        return Indicator(
            text=format_indicator(stats, limits, classification, config.status_bar_type),
            severity=classification.severity,
            ratio=classification.ratio,
            stats=stats,
            tooltip=format_tooltip(stats, limits),
        )

    def trigger_save(self, path: Optional[Path] = None) -> Optional[Indicator]:
        """On-demand check after a file save, if enabled."""
        if not self.config.auto_check_on_save:
            return None
        logger.debug(f"Save trigger: {path}")
        return self.refresh()

    # ------------------------------------------------------------------
    # Periodic polling
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Start periodic checks on a daemon thread."""
        if self._poller and self._poller.is_alive():
            return
        self._stop.clear()
        self._poller = threading.Thread(
            target=self._poll_loop,
            name="commitwatch-poller",
            daemon=True,
        )
        self._poller.start()

    def stop(self, timeout: Optional[float] = None) -> None:
        """Stop periodic checks. A check already running is left to finish."""
        self._stop.set()
        if self._poller:
            self._poller.join(timeout)
            self._poller = None

    def _poll_loop(self) -> None:
        while not self._stop.is_set():
            try:
                self.refresh()
            except Exception:
                logger.exception("Periodic size check failed")
            self._stop.wait(self.config.poll_interval)

    # ------------------------------------------------------------------
    # Buckets
    # ------------------------------------------------------------------

    def list_changes(self) -> list[ChangeRecord]:
        return get_change_set(self.repo_root)

    def preview(
        self,
        path: str,
        status: str = "",
        original_path: Optional[str] = None,
    ) -> DiffPreview:
        return describe_preview(self.repo_root, path, status, original_path)

    def commit_bucket(self, files: list[str], message: str) -> PipelineResult:
        """
        Stage, commit and push one bucket, then re-check size.

        Raises:
            BucketTooLargeError: more files than max_files
            ValueError, StagingError, CommitError, PushError: from the pipeline
        """
        max_files = self.config.max_files
        if max_files and len(files) > max_files:
            raise BucketTooLargeError(len(files), max_files)

        pipeline = StagingPipeline(self.repo_root, remote=self.config.remote)
        try:
            return pipeline.stage_commit_push(files, message)
        finally:
            self.refresh()

    def handle(self, payload: dict):
        """
        Validate a boundary message and act on it.

        Returns:
            RefreshRequest -> Indicator | None
            ChangesRequest -> list[ChangeRecord]
            PreviewRequest -> DiffPreview
            CommitRequest -> PipelineResult

        Raises:
            pydantic.ValidationError: malformed payload
        """
        request = parse_request(payload)
        if isinstance(request, RefreshRequest):
            return self.refresh(alert=request.alert)
        if isinstance(request, ChangesRequest):
            return self.list_changes()
        if isinstance(request, PreviewRequest):
            return self.preview(request.path, request.status, request.original_path)
        if isinstance(request, CommitRequest):
            return self.commit_bucket(request.files, request.message)
        raise ValueError(f"Unhandled request kind: {request.kind}")
