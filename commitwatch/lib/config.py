"""
Configuration loader for commitwatch.

Loads .commitwatch.yaml from the repository root. If no config file
exists, returns defaults. Values are checked against
schemas/config.schema.json before use.

Example .commitwatch.yaml:

    max_files: 10
    max_lines: 1000
    warn_ratio: 0.7
    poll_interval: 5
    auto_check_on_save: true
    status_bar_type: both
    remote: origin
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

from commitwatch.danger import STATUS_BAR_TYPES, Limits
from commitwatch.git.remote import DEFAULT_REMOTE
from . import validate

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".commitwatch.yaml"

DEFAULT_MAX_FILES = 10
DEFAULT_MAX_LINES = 1000
DEFAULT_WARN_RATIO = 0.7
DEFAULT_POLL_INTERVAL = 5
DEFAULT_STATUS_BAR_TYPE = "progress"

STATUS_BAR_ALIASES = {"bar": "progress"}


@dataclass
class WatchConfig:
    """Limits and watch behaviour for one workspace."""
    max_files: int = DEFAULT_MAX_FILES
    max_lines: int = DEFAULT_MAX_LINES
    warn_ratio: float = DEFAULT_WARN_RATIO
    poll_interval: float = DEFAULT_POLL_INTERVAL
    auto_check_on_save: bool = True
    status_bar_type: str = DEFAULT_STATUS_BAR_TYPE
    remote: str = DEFAULT_REMOTE

    @property
    def limits(self) -> Limits:
        return Limits(
            max_files=self.max_files,
            max_lines=self.max_lines,
            warn_ratio=self.warn_ratio,
        )


def clamp_warn_ratio(value: float) -> float:
    return max(0.0, min(1.0, float(value)))


def normalize_status_bar_type(value: str) -> str:
    """Map aliases and unknown values onto text/progress/both."""
    value = STATUS_BAR_ALIASES.get(value, value)
    if value not in STATUS_BAR_TYPES:
        logger.warning(f"Unknown status_bar_type '{value}', using '{DEFAULT_STATUS_BAR_TYPE}'")
        return DEFAULT_STATUS_BAR_TYPE
    return value


def config_from_dict(data: dict) -> WatchConfig:
    """Build a WatchConfig from raw settings, defaults filling the gaps.

    Raises:
        validate.ValidationError: if data doesn't match the config schema
    """
    validate.validate(data, "config")
    config = WatchConfig(**data)
    config.warn_ratio = clamp_warn_ratio(config.warn_ratio)
    config.status_bar_type = normalize_status_bar_type(config.status_bar_type)
    return config


def load_config(repo_root: Path, config_path: Optional[Path] = None) -> WatchConfig:
    """Load .commitwatch.yaml (or config_path) and return WatchConfig.

    Missing file -> defaults. Unparseable YAML -> warning and defaults.
    Schema violations raise validate.ValidationError.
    """
    path = config_path or Path(repo_root) / CONFIG_FILENAME
    if not path.exists():
        return WatchConfig()

    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        logger.warning(f"Failed to parse {path}: {e}")
        return WatchConfig()

    if data is None:
        return WatchConfig()
    if not isinstance(data, dict):
        raise validate.ValidationError("config", f"Expected a mapping in {path}")
    return config_from_dict(data)
