"""
Protocol Operation and Result Definitions

This module defines the data structures exchanged between the client and
the protocol layer: the remote operations, the request targets built for
them, and the results interpreted from shard responses.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class OperationType(Enum):
    """Remote operations exposed by a shard, valued by their URL path."""
    SET = "set"
    DELETE = "delete"
    FETCH = "fetch"
    FETCH_ALL = "fetchall"
    LATENCY = "latency"

    @property
    def path(self) -> str:
        return "/" + self.value

    @property
    def needs_key(self) -> bool:
        return self in (OperationType.SET, OperationType.DELETE, OperationType.FETCH)

    @property
    def is_write(self) -> bool:
        return self in (OperationType.SET, OperationType.DELETE)


class ResultStatus(Enum):
    """Enumeration of operation outcomes."""
    CONFIRMED = "CONFIRMED"
    FOUND = "FOUND"
    MISSING = "MISSING"


@dataclass(frozen=True)
class Request:
    """
    A request ready to be handed to the transport.

    Attributes:
        operation: The remote operation
        target: Full URL, including the encoded key/value query
        key: The (unencoded) key, empty for keyless operations
    """
    operation: OperationType
    target: str
    key: str = ""


@dataclass(frozen=True)
class OperationResult:
    """
    Outcome of a single remote operation.

    Attributes:
        status: CONFIRMED for writes, FOUND or MISSING for reads
        value: The confirmation token (writes) or the stored value (reads)
    """
    status: ResultStatus
    value: Any = None

    @classmethod
    def confirmed(cls, token: Any) -> "OperationResult":
        """Create a write confirmation."""
        return cls(status=ResultStatus.CONFIRMED, value=token)

    @classmethod
    def found(cls, value: Any) -> "OperationResult":
        """Create a read result carrying a stored value."""
        return cls(status=ResultStatus.FOUND, value=value)

    @classmethod
    def missing(cls) -> "OperationResult":
        """Create a read result for a key with no stored value."""
        return cls(status=ResultStatus.MISSING)

    @property
    def is_found(self) -> bool:
        return self.status == ResultStatus.FOUND

    @property
    def is_missing(self) -> bool:
        return self.status == ResultStatus.MISSING


@dataclass(frozen=True)
class StoredEntry:
    """A single key/value pair observed in a shard snapshot."""
    key: str
    data: Any = None

    def as_dict(self) -> Dict[str, Any]:
        """Return the entry in its wire shape, used for sort path lookups."""
        return {"key": self.key, "data": self.data}
