"""Client module for HexoDB."""

from .database import Database

__all__ = ["Database"]
