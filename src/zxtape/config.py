"""
zxtape Configuration
====================

Decoder settings. Configuration can come from:
- Default values (defined here)
- Environment variables

The version limits describe the newest TZX revision this decoder
understands. A file with a newer major version is rejected; a newer minor
version is only logged, because minor revisions add block kinds without
changing existing ones.
"""

from dataclasses import dataclass
import logging
import os


# Newest TZX revision described by the format documentation we implement.
SUPPORTED_MAJOR_VERSION = 1
SUPPORTED_MINOR_VERSION = 20


@dataclass
class DecoderConfig:
    """
    Configuration for TZX/TAP decoding.

    Attributes:
        max_major_version: Highest TZX major version accepted (default: 1)
        max_minor_version: Minor versions above this are logged (default: 20)
        log_level: Logging level name used by the command-line tool
    """

    max_major_version: int = SUPPORTED_MAJOR_VERSION
    max_minor_version: int = SUPPORTED_MINOR_VERSION
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "DecoderConfig":
        """
        Create a DecoderConfig from environment variables.

        Environment variables (all optional):
            ZXTAPE_MAX_MAJOR_VERSION: Highest accepted major version (integer)
            ZXTAPE_MAX_MINOR_VERSION: Highest expected minor version (integer)
            ZXTAPE_LOG_LEVEL: Logging level name (e.g. "DEBUG", "INFO")

        Returns:
            DecoderConfig with values from environment variables
        """
        config = cls()

        if major := os.environ.get("ZXTAPE_MAX_MAJOR_VERSION"):
            try:
                config.max_major_version = int(major)
            except ValueError:
                pass  # Ignore invalid values

        if minor := os.environ.get("ZXTAPE_MAX_MINOR_VERSION"):
            try:
                config.max_minor_version = int(minor)
            except ValueError:
                pass

        if level := os.environ.get("ZXTAPE_LOG_LEVEL"):
            level = level.upper()
            if isinstance(logging.getLevelName(level), int):
                config.log_level = level

        return config

    def get_log_level(self) -> int:
        """Return the configured log level as a logging constant."""
        return logging.getLevelName(self.log_level)
