"""Client-side operations: arithmetic updates and snapshot sorting."""

from .arithmetic import MathOperator, compute, resolve_operator
from .sorting import SortOptions, sort_snapshot, validate_prefix

__all__ = ["MathOperator", "SortOptions", "compute", "resolve_operator", "sort_snapshot", "validate_prefix"]
