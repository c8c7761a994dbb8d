"""
Value Normalizer Module

Validates keys and values before any request is built, and converts values
into the string form a shard stores.

Wire rules:
    - Keys: non-empty strings, max 256 characters, no whitespace and none
      of the characters in ILLEGAL_KEY_CHARS
    - Values: never None or "", numbers are sent as positional decimals,
      structures as compact JSON
"""

import json
import math
import re
from decimal import Decimal
from typing import Any, Optional, Union

from ..config.settings import settings
from ..errors import HexoKeyError, HexoValueError

# Characters that would split or terminate the query string
ILLEGAL_KEY_CHARS = frozenset("&=?#")

_INT_RE = re.compile(r"^-?\d+$")
_FLOAT_RE = re.compile(r"^-?\d+\.\d+$")

Number = Union[int, float]


def is_number(value: Any) -> bool:
    """Return True for int/float values. bool is not a number here."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_key(key: Any) -> str:
    """
    Check that a key can be used in a request.

    Args:
        key: The candidate key

    Returns:
        The key, unchanged

    Raises:
        HexoKeyError: key is not a non-empty string, is too long, or
            contains whitespace or a query delimiter
    """
    if not isinstance(key, str) or not key:
        raise HexoKeyError("Invalid key provided!")
    if len(key) > settings.MAX_KEY_LENGTH:
        raise HexoKeyError(
            f"Invalid key provided! Keys are limited to {settings.MAX_KEY_LENGTH} characters."
        )
    for char in key:
        if char.isspace() or char in ILLEGAL_KEY_CHARS:
            raise HexoKeyError(f"Invalid key provided! Illegal character {char!r}.")
    return key


def validate_value(value: Any) -> Any:
    """
    Check that a value can be written.

    Raises:
        HexoValueError: value is None, an empty string or a non-finite float
    """
    if value is None or (isinstance(value, str) and not value):
        raise HexoValueError("Invalid value provided!")
    if isinstance(value, float) and not math.isfinite(value):
        raise HexoValueError(f"Invalid value provided! {value!r} cannot be stored.")
    return value


def format_number(value: Number) -> str:
    """
    Format a number in canonical decimal form.

    Integers are formatted losslessly. Floats use the shortest repr that
    round-trips, expanded to positional notation so 1e-05 becomes
    "0.00001"; a float always keeps its decimal point.

    Examples:
        >>> format_number(42)
        '42'
        >>> format_number(1e16)
        '10000000000000000.0'
    """
    if isinstance(value, int):
        return str(value)

    text = format(Decimal(repr(value)), "f")
    if "." not in text:
        text += ".0"
    return text


def normalize_value(value: Any) -> str:
    """
    Convert a validated value into the string sent to the shard.

    Args:
        value: str, int, float, bool or a JSON-serializable structure

    Returns:
        The wire representation of the value

    Raises:
        HexoValueError: the value is not JSON-serializable
    """
    if isinstance(value, str):
        return value
    if is_number(value):
        return format_number(value)

    try:
        return json.dumps(value, separators=(",", ":"), allow_nan=False)
    except (TypeError, ValueError) as e:
        raise HexoValueError(f"Invalid value provided! {e}") from e


def coerce_number(value: Any) -> Optional[Number]:
    """
    Return the numeric form of a stored value, or None if it is not numeric.

    Numbers written by this client come back as strings, so strings in the
    canonical form produced by format_number() count as numeric.
    """
    if is_number(value):
        return value
    if isinstance(value, str):
        text = value.strip()
        if _INT_RE.match(text):
            return int(text)
        if _FLOAT_RE.match(text):
            return float(text)
    return None
