"""
HexoDB Error Types

Every failure raised by the client derives from HexoError. The validation
errors also derive from the matching builtin (KeyError, ValueError,
TypeError) so callers can catch either.
"""

from typing import Optional


class HexoError(Exception):
    """Base class for all HexoDB client errors."""

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return str(self.args[0]) if self.args else ""


class HexoKeyError(HexoError, KeyError):
    """The key is missing, not a string, or not encodable."""


class HexoValueError(HexoError, ValueError):
    """The value is missing or cannot be sent to the shard."""


class HexoTypeError(HexoError, TypeError):
    """An argument has the wrong type (e.g. a non-string prefix)."""


class NotANumberError(HexoTypeError):
    """The stored value targeted by an arithmetic update is not numeric."""


class UnsupportedOperatorError(HexoError, ValueError):
    """The arithmetic operator tag is not recognised."""


class HexoShardError(HexoError):
    """
    The shard could not be reached or answered with something unparsable.

    Attributes:
        target: The request target that failed, when known
        status_code: The HTTP status of the response, when one was received
    """

    def __init__(
            self,
            message: str,
            target: Optional[str] = None,
            status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.target = target
        self.status_code = status_code


TransportError = HexoShardError
