"""Configuration management for action-deps.

Loads environment variables and provides centralized config access.
"""
import logging
import os
from pathlib import Path
from typing import List
from dotenv import load_dotenv

from .analyzer.entry_points import DEFAULT_ENTRY_POINT_PATTERNS
from .analyzer.file_finder import DEFAULT_EXCLUDED_DIRS, split_patterns

# Version - keep in sync with pyproject.toml
__version__ = "1.0.0"


class Config:
    """Configuration loader with environment variable support."""

    def __init__(self, env_path: Path | None = None):
        """Initialize config by loading a .env file.

        Args:
            env_path: .env file to load (default: ./.env in the working directory)
        """
        load_dotenv(env_path or Path.cwd() / ".env")
        self._validate()

    def _validate(self):
        """Validate environment values that have a fixed vocabulary.

        Raises:
            ValueError: If ACTION_DEPS_LOG_LEVEL is not a logging level name
        """
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(
                f"ACTION_DEPS_LOG_LEVEL has invalid value '{self.log_level}'. "
                "Use DEBUG, INFO, WARNING, ERROR or CRITICAL."
            )

    @property
    def entry_point_patterns(self) -> List[str]:
        """Get view entry-point glob patterns.

        Priority:
        1. ACTION_DEPS_ENTRY_POINT_PATTERNS environment variable (comma separated)
        2. Fallback to pages/**/*.{tsx,jsx,ts,js}

        Returns:
            List of glob patterns
        """
        value = os.getenv("ACTION_DEPS_ENTRY_POINT_PATTERNS")
        return list(DEFAULT_ENTRY_POINT_PATTERNS) if value is None else split_patterns(value)

    @property
    def log_level(self) -> str:
        """Get log level name from environment (default WARNING)."""
        return os.getenv("ACTION_DEPS_LOG_LEVEL", "WARNING").upper()

    @property
    def excluded_dirs(self) -> List[str]:
        """Get directory names skipped during file discovery.

        Returns:
            List of directory names
        """
        value = os.getenv("ACTION_DEPS_EXCLUDED_DIRS")
        return list(DEFAULT_EXCLUDED_DIRS) if value is None else split_patterns(value)


# Singleton instance
_config = None


def get_config() -> Config:
    """Get or create singleton Config instance.

    Returns:
        Config instance
    """
    global _config
    if _config is None:
        _config = Config()
    return _config


def reset_config():
    """Drop the cached Config so the next get_config() re-reads the environment."""
    global _config
    _config = None
