"""Configuration management for promptline."""

import os
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .platform import get_home_directory, normalize_path


DEFAULT_ENV_FILE = Path("~/.config/promptline/promptline.env")


@dataclass
class Config:
    """Configuration class for promptline with validation and defaults."""

    # Logging
    log_level: str = "WARNING"
    log_file: Optional[Path] = None

    # Output
    enable_color: bool = True

    # Path shortening
    home_dir: Optional[Path] = None

    def __post_init__(self):
        """Validate configuration after initialization."""
        valid_log_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if self.log_level.upper() not in valid_log_levels:
            raise ValueError(f"Invalid log level: {self.log_level}. Must be one of {valid_log_levels}")
        self.log_level = self.log_level.upper()

        if isinstance(self.log_file, str):
            self.log_file = Path(self.log_file)
        if self.log_file is not None:
            self.log_file = normalize_path(self.log_file)

        if isinstance(self.home_dir, str):
            self.home_dir = Path(self.home_dir)
        if self.home_dir is None:
            self.home_dir = get_home_directory()


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"{name} must be a boolean, got {value!r}")


def load_configuration(env_file: Optional[Path] = None) -> Config:
    """Load configuration from environment variables and the optional env file."""
    env_path = (env_file or DEFAULT_ENV_FILE).expanduser()
    if env_path.is_file():
        # Parse warnings would otherwise reach stderr through logging.lastResort
        dotenv_logger = logging.getLogger('dotenv')
        if not dotenv_logger.handlers:
            dotenv_logger.addHandler(logging.NullHandler())
            dotenv_logger.propagate = False

        # Variables already present in the environment take precedence
        load_dotenv(env_path, override=False)
        logging.getLogger('promptline.config').debug(f"Loaded environment file {env_path}")

    try:
        enable_color = _parse_bool("PROMPTLINE_COLOR", os.getenv("PROMPTLINE_COLOR", "true"))
        if os.getenv("NO_COLOR"):
            enable_color = False

        return Config(
            log_level=os.getenv("PROMPTLINE_LOG_LEVEL", "WARNING"),
            log_file=os.getenv("PROMPTLINE_LOG_FILE") or None,
            enable_color=enable_color,
            home_dir=os.getenv("PROMPTLINE_HOME") or None
        )
    except (ValueError, TypeError) as e:
        raise ValueError(f"Configuration error: {e}")
