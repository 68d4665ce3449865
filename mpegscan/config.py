"""
Configuration management for mpegscan.

Reads configuration from a .env file and environment variables with sensible defaults.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


# Default .env file location
DEFAULT_ENV_FILE = Path("mpegscan.env")

TAG_POLICIES = ("skip", "require")

logger = logging.getLogger(__name__)


def _load_env_file() -> None:
    """Load environment variables from .env file if it exists."""
    env_file = os.getenv("MPEGSCAN_ENV_FILE", str(DEFAULT_ENV_FILE))
    env_path = Path(env_file)

    if env_path.exists():
        load_dotenv(env_path, override=False)  # Don't override existing env vars


def _parse_max_frames(value: Optional[str]) -> Optional[int]:
    """
    Parse the frame limit.

    Args:
        value: Raw environment value; None or "" means no limit

    Returns:
        Frame limit, or None for no limit

    Raises:
        ValueError: If value is not an integer
    """
    if value is None or value.strip() == "":
        return None
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"Invalid MPEGSCAN_MAX_FRAMES: {value} (must be an integer)")


@dataclass
class ScanConfig:
    """mpegscan configuration loaded from .env file and environment variables."""

    # Logging
    log_level: str = "INFO"

    # What to do when a file has no ID3 tag: "skip" scans the whole buffer,
    # "require" treats it as an error
    tag_policy: str = "skip"

    # Stop after this many frames (None = read to end of stream)
    max_frames: Optional[int] = None

    @property
    def require_tag(self) -> bool:
        return self.tag_policy == "require"

    @classmethod
    def load_config(cls) -> "ScanConfig":
        """
        Load configuration from environment variables.

        Returns:
            ScanConfig instance with loaded values

        Raises:
            ValueError: If configuration is invalid
        """
        # Load .env file first (if it exists)
        _load_env_file()

        log_level = os.getenv("MPEGSCAN_LOG_LEVEL", "INFO")
        tag_policy = os.getenv("MPEGSCAN_TAG_POLICY", "skip").strip().lower()
        max_frames = _parse_max_frames(os.getenv("MPEGSCAN_MAX_FRAMES"))

        config = cls(
            log_level=log_level,
            tag_policy=tag_policy,
            max_frames=max_frames,
        )

        config.validate()

        return config

    def validate(self) -> None:
        """
        Validate configuration values.

        Raises:
            ValueError: If configuration is invalid
        """
        valid_log_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if self.log_level.upper() not in valid_log_levels:
            raise ValueError(
                f"Invalid log level: {self.log_level} "
                f"(must be one of: {', '.join(valid_log_levels)})"
            )

        if self.tag_policy not in TAG_POLICIES:
            raise ValueError(
                f"Invalid MPEGSCAN_TAG_POLICY: {self.tag_policy} "
                f"(must be 'skip' or 'require')"
            )

        if self.max_frames is not None and self.max_frames <= 0:
            raise ValueError(f"Invalid max frames: {self.max_frames} (must be > 0)")


def load_config() -> ScanConfig:
    """
    Load and validate mpegscan configuration from environment variables.

    Returns:
        ScanConfig instance with loaded and validated values

    Raises:
        ValueError: If configuration is invalid
    """
    try:
        return ScanConfig.load_config()
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        raise
