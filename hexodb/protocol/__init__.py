"""Protocol module for HexoDB."""

from .builder import RequestBuilder
from .commands import (
    OperationResult,
    OperationType,
    Request,
    ResultStatus,
    StoredEntry,
)
from .interpreter import ResponseInterpreter
from .normalizer import coerce_number, normalize_value, validate_key, validate_value

__all__ = [
    "OperationResult",
    "OperationType",
    "Request",
    "RequestBuilder",
    "ResponseInterpreter",
    "ResultStatus",
    "StoredEntry",
    "coerce_number",
    "normalize_value",
    "validate_key",
    "validate_value",
]
