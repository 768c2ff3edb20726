"""
Configuration loader for the board.

Reads board.env (KEY=value) and lets environment variables override it.
Priority: environment variables > board.env > defaults.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from . import envparse
from .constants import CONFIG_FILENAME

logger = logging.getLogger(__name__)

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_NOTIFY_TIMEOUT = 3.0  # seconds a notification stays visible


@dataclass
class BoardConfig:
    """Board configuration from board.env and BOARD_* environment variables."""
    title: str = "Team Assignment"
    seed_path: Optional[Path] = None  # None means the built-in dataset
    log_level: str = DEFAULT_LOG_LEVEL
    notify_timeout: float = DEFAULT_NOTIFY_TIMEOUT


def _setting(env: dict, key: str, default: str | None = None) -> str | None:
    return os.environ.get(key, env.get(key, default))


def load_config(config_path: Path | None = None) -> BoardConfig:
    """Load board configuration.

    If config_path is None, board.env in the current directory is used
    when present.

    Raises:
        FileNotFoundError: if an explicit config_path doesn't exist
        ValueError: if the file has invalid syntax
    """
    env: dict = {}
    if config_path is not None:
        env = envparse.load_env(config_path)
    else:
        candidate = Path.cwd() / CONFIG_FILENAME
        if candidate.exists():
            env = envparse.load_env(candidate)

    log_level = (_setting(env, "BOARD_LOG_LEVEL", DEFAULT_LOG_LEVEL) or DEFAULT_LOG_LEVEL).upper()
    if log_level not in VALID_LOG_LEVELS:
        logger.warning(f"[CONFIG] Unknown BOARD_LOG_LEVEL '{log_level}', using '{DEFAULT_LOG_LEVEL}'")
        log_level = DEFAULT_LOG_LEVEL

    raw_timeout = _setting(env, "BOARD_NOTIFY_TIMEOUT")
    notify_timeout = DEFAULT_NOTIFY_TIMEOUT
    if raw_timeout:
        try:
            notify_timeout = float(raw_timeout)
        except ValueError:
            logger.warning(f"[CONFIG] Invalid BOARD_NOTIFY_TIMEOUT '{raw_timeout}', using {DEFAULT_NOTIFY_TIMEOUT}")
        else:
            if notify_timeout <= 0:
                logger.warning(f"[CONFIG] BOARD_NOTIFY_TIMEOUT must be positive, using {DEFAULT_NOTIFY_TIMEOUT}")
                notify_timeout = DEFAULT_NOTIFY_TIMEOUT

    seed = _setting(env, "BOARD_SEED")
    seed_path = None
    if seed:
        seed_path = Path(seed)
        # Relative seed paths in a config file are relative to that file
        if not seed_path.is_absolute() and config_path is not None and "BOARD_SEED" not in os.environ:
            seed_path = Path(config_path).parent / seed_path

    return BoardConfig(
        title=_setting(env, "BOARD_TITLE", "Team Assignment") or "Team Assignment",
        seed_path=seed_path,
        log_level=log_level,
        notify_timeout=notify_timeout,
    )
