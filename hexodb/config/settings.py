"""
HexoDB Configuration Settings

Client-wide defaults, overridable through environment variables.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Client configuration settings."""

    # Shard settings
    URL: str = os.environ.get("HEXODB_URL", "")
    TIMEOUT: float = float(os.environ.get("HEXODB_TIMEOUT", "10"))

    # Validation settings
    MAX_KEY_LENGTH: int = 256

    # Logging settings
    DEBUG: bool = os.environ.get("HEXODB_DEBUG", "false").lower() == "true"
    LOG_LEVEL: str = os.environ.get("HEXODB_LOG_LEVEL", "INFO")


# Global settings instance
settings = Settings()
