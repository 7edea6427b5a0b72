"""
cw stats - Show change-set size against the configured limits.
"""

from pathlib import Path

from rich.console import Console

from commitwatch.danger import SEVERITY_STYLES
from commitwatch.engine import Indicator, WatchEngine
from commitwatch.lib.config import WatchConfig
from commitwatch.lib.constants import EXIT_ERROR, EXIT_OK


def format_indicator_rich(indicator: Indicator) -> str:
    """Wrap the indicator text in Rich markup for its severity."""
    style = SEVERITY_STYLES[indicator.severity]
    return f"[{style}]{indicator.text}[/{style}]"


def cmd_stats(args, repo_root: Path, config: WatchConfig) -> int:
    """Run one size check and print it."""
    console = Console()
    engine = WatchEngine(repo_root, config)
    indicator = engine.refresh(alert=getattr(args, "alert", False))

    console.print(format_indicator_rich(indicator))
    if indicator.tooltip:
        console.print(indicator.tooltip, style="dim", highlight=False)

    return EXIT_OK if indicator.available else EXIT_ERROR
