"""Tests for the cw command handlers and argument parsing."""

import os
from argparse import Namespace
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from commitwatch import cli
from commitwatch.commands.commit import cmd_commit
from commitwatch.commands.stats import cmd_stats, format_indicator_rich
from commitwatch.commands.status import cmd_status
from commitwatch.commands.watch import ConfigReloader
from commitwatch.danger import Severity
from commitwatch.engine import Indicator
from commitwatch.errors import BucketTooLargeError, CommitError, PushError
from commitwatch.git.diff import DiffStats
from commitwatch.git.runner import GitCommandError, GitResult
from commitwatch.git.status import parse_status
from commitwatch.lib.config import CONFIG_FILENAME, WatchConfig
from commitwatch.lib.constants import EXIT_CONFIG, EXIT_ERROR, EXIT_OK, EXIT_PUSH_FAILED
from commitwatch.lib.validate import ValidationError
from commitwatch.pipeline import PipelineResult

REPO = Path("/repo")


class TestCmdStatus:

    @patch("commitwatch.commands.status.get_change_set")
    def test_lists_records(self, mock_changes, capsys):
        mock_changes.return_value = parse_status(" M a.txt\0R  new.txt\0old.txt\0", REPO)
        assert cmd_status(Namespace(), REPO, WatchConfig()) == EXIT_OK
        out = capsys.readouterr().out
        assert "·M  a.txt" in out
        assert "R·  new.txt  (from old.txt)" in out
        assert "2 changed file(s)" in out

    @patch("commitwatch.commands.status.get_change_set")
    def test_clean(self, mock_changes, capsys):
        mock_changes.return_value = []
        assert cmd_status(Namespace(), REPO, WatchConfig()) == EXIT_OK
        assert "No uncommitted changes" in capsys.readouterr().out

    @patch("commitwatch.commands.status.get_change_set")
    def test_not_a_repo(self, mock_changes):
        mock_changes.side_effect = GitCommandError(
            ["status"], GitResult(returncode=128, stdout="", stderr="fatal: not a git repository")
        )
        assert cmd_status(Namespace(), REPO, WatchConfig()) == EXIT_ERROR


class TestCmdStats:

    def test_rich_markup(self):
        indicator = Indicator(text="🔴 [██████████] 100%", severity=Severity.CRITICAL, ratio=1.0)
        markup = format_indicator_rich(indicator)
        assert markup.startswith("[")
        assert "🔴 [██████████] 100%" in markup

    @patch("commitwatch.engine.get_diff_stats")
    def test_prints_indicator(self, mock_stats, capsys):
        mock_stats.return_value = DiffStats(files=8, lines=650)
        assert cmd_stats(Namespace(alert=False), REPO, WatchConfig()) == EXIT_OK
        assert "80%" in capsys.readouterr().out

    @patch("commitwatch.engine.get_diff_stats")
    def test_unavailable_is_error(self, mock_stats):
        mock_stats.side_effect = GitCommandError(
            ["status"], GitResult(returncode=128, stdout="", stderr="fatal")
        )
        assert cmd_stats(Namespace(alert=False), REPO, WatchConfig()) == EXIT_ERROR


class TestCmdCommit:

    @patch("commitwatch.commands.commit.WatchEngine")
    def test_success(self, mock_engine_cls, capsys):
        engine = mock_engine_cls.return_value
        engine.commit_bucket.return_value = PipelineResult(
            staged={"lib/x.ts": ".lib/x.ts"}, branch="main", set_upstream=True
        )
        engine.last_indicator = None

        args = Namespace(files=["lib/x.ts"], message="Add x")
        assert cmd_commit(args, REPO, WatchConfig()) == EXIT_OK

        engine.commit_bucket.assert_called_once_with(["lib/x.ts"], "Add x")
        out = capsys.readouterr().out
        assert "staged lib/x.ts as .lib/x.ts" in out
        assert "(upstream set)" in out

    def test_blank_message(self):
        args = Namespace(files=["a.txt"], message="  ")
        assert cmd_commit(args, REPO, WatchConfig()) == EXIT_CONFIG

    @pytest.mark.parametrize("error, code", [
        (BucketTooLargeError(12, 10), EXIT_CONFIG),
        (PushError("rejected"), EXIT_PUSH_FAILED),
        (CommitError("nothing to commit"), EXIT_ERROR),
    ])
    @patch("commitwatch.commands.commit.WatchEngine")
    def test_failures(self, mock_engine_cls, error, code):
        mock_engine_cls.return_value.commit_bucket.side_effect = error
        args = Namespace(files=["a.txt"], message="msg")
        assert cmd_commit(args, REPO, WatchConfig()) == code


class TestMain:

    def test_invalid_config_exits(self, tmp_path, capsys):
        (tmp_path / CONFIG_FILENAME).write_text("max_files: lots\n")
        with patch("sys.argv", ["cw", "-C", str(tmp_path), "status"]):
            with pytest.raises(SystemExit) as exc_info:
                cli.main()
        assert exc_info.value.code == EXIT_CONFIG
        assert "Invalid configuration" in capsys.readouterr().err

    def test_requires_subcommand(self):
        with patch("sys.argv", ["cw"]):
            with pytest.raises(SystemExit) as exc_info:
                cli.main()
        assert exc_info.value.code != 0

    @patch("commitwatch.commands.status.get_change_set")
    def test_dispatches_with_repo_root(self, mock_changes, tmp_path):
        mock_changes.return_value = []
        with patch("sys.argv", ["cw", "-C", str(tmp_path), "status"]):
            assert cli.main() == EXIT_OK
        mock_changes.assert_called_once_with(tmp_path.resolve())


class TestConfigReloader:
    """Config file changes reach a running engine."""

    def _write(self, path, text, mtime):
        path.write_text(text)
        os.utime(path, (mtime, mtime))

    def test_unchanged_file_not_reloaded(self, tmp_path):
        path = tmp_path / CONFIG_FILENAME
        self._write(path, "max_files: 5\n", 1000)
        engine = MagicMock()
        assert ConfigReloader(engine, path).check() is False
        engine.update_config.assert_not_called()

    def test_changed_file_reloaded(self, tmp_path):
        path = tmp_path / CONFIG_FILENAME
        self._write(path, "max_files: 5\n", 1000)
        engine = MagicMock()
        reloader = ConfigReloader(engine, path)

        self._write(path, "max_files: 3\n", 2000)
        assert reloader.check() is True
        config = engine.update_config.call_args[0][0]
        assert config.max_files == 3

    def test_created_file_reloaded_with_interval_override(self, tmp_path):
        path = tmp_path / CONFIG_FILENAME
        engine = MagicMock()
        reloader = ConfigReloader(engine, path, interval=1.5)

        self._write(path, "poll_interval: 30\n", 2000)
        assert reloader.check() is True
        assert engine.update_config.call_args[0][0].poll_interval == 1.5

    def test_invalid_change_keeps_settings(self, tmp_path):
        path = tmp_path / CONFIG_FILENAME
        self._write(path, "max_files: 5\n", 1000)
        engine = MagicMock()
        reloader = ConfigReloader(engine, path)

        self._write(path, "max_files: many\n", 2000)
        with pytest.raises(ValidationError):
            reloader.check()
        engine.update_config.assert_not_called()
        assert reloader.check() is False
