"""
cw watch - Keep checking change-set size until interrupted.
"""

import threading
from pathlib import Path
from typing import Optional

from rich.console import Console

from commitwatch.commands.stats import format_indicator_rich
from commitwatch.engine import Indicator, WatchEngine
from commitwatch.lib.config import CONFIG_FILENAME, WatchConfig, load_config
from commitwatch.lib.constants import EXIT_OK
from commitwatch.lib.validate import ValidationError

CONFIG_CHECK_INTERVAL = 2  # seconds


def _mtime(path: Path) -> Optional[float]:
    try:
        return path.stat().st_mtime
    except OSError:
        return None


class ConfigReloader:
    """Re-reads the config file when its mtime changes and hands it to the engine."""

    def __init__(self, engine: WatchEngine, config_path: Path, interval: Optional[float] = None):
        self.engine = engine
        self.config_path = config_path
        self.interval = interval
        self._mtime = _mtime(config_path)

    def check(self) -> bool:
        """
        Reload if the file changed since the last check.

        Returns:
            True if the engine got new settings

        Raises:
            ValidationError: the changed file is invalid; the engine keeps its settings
        """
        mtime = _mtime(self.config_path)
        if mtime == self._mtime:
            return False
        self._mtime = mtime

        config = load_config(self.config_path.parent, self.config_path)
        if self.interval:
            config.poll_interval = self.interval
        self.engine.update_config(config)
        return True


def cmd_watch(args, repo_root: Path, config: WatchConfig) -> int:
    """Poll every poll_interval seconds, printing the indicator when it changes."""
    interval = getattr(args, "interval", None)
    if interval:
        config.poll_interval = interval

    console = Console()
    last_text = None

    def on_update(indicator: Indicator) -> None:
        nonlocal last_text
        if indicator.text != last_text:
            last_text = indicator.text
            console.print(format_indicator_rich(indicator))

    engine = WatchEngine(repo_root, config, on_update=on_update)
    config_arg = getattr(args, "config", None)
    config_path = Path(config_arg) if config_arg else repo_root / CONFIG_FILENAME
    reloader = ConfigReloader(engine, config_path, interval)

    console.print(
        f"Watching {repo_root} every {config.poll_interval}s (Ctrl-C to stop)",
        style="dim",
    )
    engine.start()
    stop = threading.Event()
    try:
        while not stop.wait(CONFIG_CHECK_INTERVAL):
            try:
                if reloader.check():
                    console.print(f"Reloaded {config_path}", style="dim")
            except ValidationError as e:
                console.print(f"Ignoring invalid configuration: {e}", style="red", highlight=False)
    except KeyboardInterrupt:
        pass
    finally:
        engine.stop(timeout=1)
    return EXIT_OK
