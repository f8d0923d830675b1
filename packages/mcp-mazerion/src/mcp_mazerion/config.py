"""
Configuration management for the Mazerion MCP server.
"""

import logging
import os
from dataclasses import dataclass

from mazerion_core.exceptions import ConfigurationError

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class MazerionConfig:
    """Configuration for the calculator server."""

    log_level: str = "WARNING"
    search_threshold: float = 0.6
    search_limit: int = 5

    def __post_init__(self):
        self.log_level = self.log_level.upper()
        if self.log_level not in LOG_LEVELS:
            raise ConfigurationError(
                f"Invalid log level '{self.log_level}'. Must be one of: {', '.join(LOG_LEVELS)}"
            )
        if not 0 <= self.search_threshold <= 1:
            raise ConfigurationError("Search threshold must be between 0 and 1")
        if self.search_limit < 1:
            raise ConfigurationError("Search limit must be at least 1")

    @property
    def logging_level(self) -> int:
        """Numeric level for logging.basicConfig."""
        return getattr(logging, self.log_level)


def get_config() -> MazerionConfig:
    """
    Get server configuration from the environment.

    Environment variables:
        MAZERION_LOG_LEVEL: Logging level (default WARNING)
        MAZERION_SEARCH_THRESHOLD: Minimum fuzzy match score, 0-1 (default 0.6)
        MAZERION_SEARCH_LIMIT: Maximum search results (default 5)

    Returns:
        MazerionConfig instance

    Raises:
        ConfigurationError: If a variable is set to an invalid value
    """
    log_level = os.environ.get("MAZERION_LOG_LEVEL", "WARNING")
    threshold = os.environ.get("MAZERION_SEARCH_THRESHOLD", "0.6")
    limit = os.environ.get("MAZERION_SEARCH_LIMIT", "5")

    try:
        search_threshold = float(threshold)
    except ValueError as e:
        raise ConfigurationError(
            f"MAZERION_SEARCH_THRESHOLD must be a number, got '{threshold}'"
        ) from e

    try:
        search_limit = int(limit)
    except ValueError as e:
        raise ConfigurationError(
            f"MAZERION_SEARCH_LIMIT must be a whole number, got '{limit}'"
        ) from e

    return MazerionConfig(
        log_level=log_level,
        search_threshold=search_threshold,
        search_limit=search_limit,
    )
