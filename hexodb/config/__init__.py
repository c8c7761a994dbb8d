"""Configuration module for HexoDB."""

from .settings import Settings, settings

__all__ = ["Settings", "settings"]
