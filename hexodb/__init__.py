"""
HexoDB: Python client for HexoDB shards

An asyncio client for a remote, HTTP-backed key-value store ("shard")
addressed by a single base URL.
"""

from .client.database import Database
from .errors import (
    HexoError,
    HexoKeyError,
    HexoShardError,
    HexoTypeError,
    HexoValueError,
    NotANumberError,
    TransportError,
    UnsupportedOperatorError,
)
from .ops.arithmetic import MathOperator
from .ops.sorting import SortOptions
from .protocol.commands import OperationResult, OperationType, StoredEntry

__version__ = "1.0.0"

__all__ = [
    "Database",
    "HexoError",
    "HexoKeyError",
    "HexoShardError",
    "HexoTypeError",
    "HexoValueError",
    "MathOperator",
    "NotANumberError",
    "OperationResult",
    "OperationType",
    "SortOptions",
    "StoredEntry",
    "TransportError",
    "UnsupportedOperatorError",
]
