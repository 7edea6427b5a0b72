"""Stage -> commit -> push pipeline for one bucket.

Each run is tracked by a small state machine (transitions library) so the
caller always knows how far it got:

    idle -> staging -> committing -> pushing -> pushed
               |            |            |
          stage_failed  commit_failed  push_failed

Usage:
    from commitwatch.pipeline import StagingPipeline

    pipeline = StagingPipeline(repo_root)
    result = pipeline.stage_commit_push(["src/a.ts", "b.txt"], "Split parser")

Nothing is rolled back. Files staged before a StagingError stay staged
(git has no "unstage what I just did" primitive), and a PushError leaves
the local commit in place.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from transitions import Machine

from commitwatch.errors import CommitError, PushError, StagingError
from commitwatch.git.branch import get_current_branch, has_upstream
from commitwatch.git.commit import commit as git_commit, stage_path
from commitwatch.git.paths import staging_candidates
from commitwatch.git.remote import DEFAULT_REMOTE, push as git_push, push_set_upstream
from commitwatch.git.runner import GitCommandError
from commitwatch.git.status import get_change_set, get_known_changed_paths

logger = logging.getLogger(__name__)


STATES = [
    "idle",
    "staging",
    "committing",
    "pushing",
    "pushed",
    "stage_failed",
    "commit_failed",
    "push_failed",
]

TRANSITIONS = [
    {"trigger": "start", "source": "idle", "dest": "staging"},
    {"trigger": "stage_ok", "source": "staging", "dest": "committing"},
    {"trigger": "stage_error", "source": "staging", "dest": "stage_failed"},
    {"trigger": "commit_ok", "source": "committing", "dest": "pushing"},
    {"trigger": "commit_error", "source": "committing", "dest": "commit_failed"},
    {"trigger": "push_ok", "source": "pushing", "dest": "pushed"},
    {"trigger": "push_error", "source": "pushing", "dest": "push_failed"},
]

TERMINAL_STATES = {"pushed", "stage_failed", "commit_failed", "push_failed"}


@dataclass
class PipelineResult:
    """Outcome of a successful run."""
    staged: dict[str, str] = field(default_factory=dict)  # input path -> path git accepted
    branch: str = ""
    set_upstream: bool = False


class PipelineRun:
    """State of a single stage -> commit -> push attempt."""

    def __init__(self, on_transition: Callable[[str, str, str], None] | None = None):
        self.on_transition = on_transition
        self.machine = Machine(
            model=self,
            states=STATES,
            transitions=TRANSITIONS,
            initial="idle",
            auto_transitions=False,
            send_event=True,
            after_state_change="on_state_change",
        )

    def on_state_change(self, event) -> None:
        from_state = event.transition.source
        to_state = event.transition.dest
        trigger = event.event.name
        logger.info(f"[pipeline] {from_state} -> {to_state} ({trigger})")
        if self.on_transition:
            self.on_transition(from_state, to_state, trigger)

    @property
    def committed(self) -> bool:
        """True once a local commit exists for this run."""
        return self.state in ("pushing", "pushed", "push_failed")

    @property
    def finished(self) -> bool:
        return self.state in TERMINAL_STATES


class StagingPipeline:
    """Stages, commits and pushes a bucket of files in one repository.

    Not guarded against concurrent use; callers must not run two pipelines
    on the same repository at once.
    """

    def __init__(
        self,
        repo_root: Path,
        remote: str = DEFAULT_REMOTE,
        on_transition: Callable[[str, str, str], None] | None = None,
    ):
        self.repo_root = Path(repo_root)
        self.remote = remote
        self.on_transition = on_transition
        self.last_run: PipelineRun | None = None

    def _known_changed_paths(self) -> set[str]:
        try:
            return get_known_changed_paths(get_change_set(self.repo_root))
        except GitCommandError as e:
            logger.warning(f"Could not list changed paths before staging: {e}")
            return set()

    def stage_files(self, files: list[str]) -> dict[str, str]:
        """
        Stage every file, trying each candidate path until git accepts one.

        Returns:
            Mapping of input path -> candidate that was staged

        Raises:
            StagingError: naming every file no candidate worked for
        """
        known = self._known_changed_paths()
        staged = {}
        failed = []

        for file in files:
            candidates = staging_candidates(self.repo_root, file, known)
            for candidate in candidates:
                result = stage_path(self.repo_root, candidate)
                if result.success:
                    staged[file] = candidate
                    break
                logger.debug(f"git add {candidate!r} failed: {result.output}")
            else:
                logger.warning(f"Could not stage {file!r}; tried {candidates}")
                failed.append(file)

        if failed:
            raise StagingError(failed)
        return staged

    def commit(self, message: str) -> None:
        """Commit staged changes. Raises CommitError with git's output on failure."""
        result = git_commit(self.repo_root, message)
        if not result.success:
            raise CommitError(result.output)

    def push(self) -> tuple[str, bool]:
        """
        Push the current branch, setting the upstream on first push.

        Returns:
            (branch, set_upstream) - set_upstream is True if upstream was configured

        Raises:
            PushError: detached HEAD, or git push failed
        """
        branch = get_current_branch(self.repo_root)
        if not branch:
            raise PushError("no current branch (detached HEAD?)")

        if has_upstream(self.repo_root):
            result = git_push(self.repo_root)
            set_upstream = False
        else:
            logger.info(f"No upstream for {branch}; pushing with --set-upstream {self.remote}")
            result = push_set_upstream(self.repo_root, self.remote, branch)
            set_upstream = True

        if not result.success:
            raise PushError(result.output)
        return branch, set_upstream

    def stage_commit_push(self, files: list[str], message: str) -> PipelineResult:
        """
        Run the whole pipeline for one bucket.

        Raises:
            ValueError: empty file list or blank message
            StagingError, CommitError, PushError: see module docstring
        """
        if not files:
            raise ValueError("No files to commit")
        if not message or not message.strip():
            raise ValueError("Commit message is required")

        run = PipelineRun(on_transition=self.on_transition)
        self.last_run = run
        run.start()

        try:
            staged = self.stage_files(files)
        except StagingError:
            run.stage_error()
            raise
        run.stage_ok()

        try:
            self.commit(message)
        except CommitError:
            run.commit_error()
            raise
        run.commit_ok()

        try:
            branch, set_upstream = self.push()
        except PushError:
            run.push_error()
            raise
        run.push_ok()

        return PipelineResult(staged=staged, branch=branch, set_upstream=set_upstream)
