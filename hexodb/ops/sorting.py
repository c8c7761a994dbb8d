"""
Snapshot Sort Module

Filters a fetched snapshot by key prefix and orders it by a dotted path
into each entry, e.g. ".data.score" reads entry["data"]["score"].
"""

import json
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Tuple, Union

from ..errors import HexoTypeError, HexoValueError
from ..protocol.commands import StoredEntry
from ..protocol.normalizer import coerce_number

_MISSING = object()


@dataclass(frozen=True)
class SortOptions:
    """
    Options for Database.starts_with().

    Attributes:
        sort: Dotted path to sort by (leading "." optional); None keeps
            snapshot order
        order: "asc" or "desc"
        limit: Maximum number of entries returned, None for all
    """
    sort: Optional[str] = None
    order: str = "asc"
    limit: Optional[int] = None

    def __post_init__(self):
        if self.sort is not None and not isinstance(self.sort, str):
            raise HexoTypeError(f"Expected sort to be a string, but received a {type(self.sort).__name__}")
        if self.order not in ("asc", "desc"):
            raise HexoValueError(f"Invalid sort order {self.order!r}, expected 'asc' or 'desc'")
        if self.limit is not None and (
                isinstance(self.limit, bool) or not isinstance(self.limit, int) or self.limit < 0):
            raise HexoValueError(f"Invalid limit {self.limit!r}")

    @classmethod
    def coerce(cls, options: Union["SortOptions", Mapping[str, Any], None]) -> "SortOptions":
        """Accept a SortOptions, a plain mapping such as {"sort": ".data"}, or None."""
        if options is None:
            return cls()
        if isinstance(options, SortOptions):
            return options
        if isinstance(options, Mapping):
            unknown = set(options) - {"sort", "order", "limit"}
            if unknown:
                raise HexoValueError(f"Unknown sort options: {', '.join(sorted(unknown))}")
            return cls(**dict(options))
        raise HexoTypeError(f"Expected options to be a mapping, but received a {type(options).__name__}")

    @property
    def path(self) -> List[str]:
        if not self.sort:
            return []
        return [part for part in self.sort.lstrip(".").split(".") if part]


def validate_prefix(prefix: Any) -> str:
    """
    Check a starts_with() prefix.

    Raises:
        HexoTypeError: prefix is not a non-empty string
    """
    if not isinstance(prefix, str) or not prefix:
        raise HexoTypeError(f"Expected key to be a string, but received a {type(prefix).__name__}")
    return prefix


def _decode_structure(node: str) -> Any:
    # structures written by set() are stored as JSON text
    try:
        decoded = json.loads(node)
    except ValueError:
        return _MISSING
    return decoded if isinstance(decoded, (Mapping, list)) else _MISSING


def resolve_path(entry: StoredEntry, path: List[str]) -> Any:
    """
    Follow a path through nested mappings and lists; _MISSING if it breaks.

    A string met before the last part is decoded as JSON first.
    """
    node: Any = entry.as_dict()
    for part in path:
        if isinstance(node, str):
            node = _decode_structure(node)
        if isinstance(node, Mapping) and part in node:
            node = node[part]
        elif isinstance(node, list) and part.isdigit() and int(part) < len(node):
            node = node[int(part)]
        else:
            return _MISSING
    return node


def _sort_key(value: Any) -> Tuple[int, Any]:
    # numbers (including numeric strings) < strings < everything else, compared by JSON text
    number = coerce_number(value)
    if number is not None:
        return (0, number)
    if isinstance(value, str):
        return (1, value)
    return (2, json.dumps(value, sort_keys=True, default=str))


def sort_snapshot(
        prefix: str,
        snapshot: List[StoredEntry],
        options: Union[SortOptions, Mapping[str, Any], None] = None,
) -> List[StoredEntry]:
    """
    Return the entries whose key starts with prefix, ordered per options.

    The sort is stable, so entries with equal sort values keep snapshot
    order in both directions. Entries without a value at the sort path
    always come last.

    Raises:
        HexoTypeError: prefix is not a non-empty string
    """
    validate_prefix(prefix)

    opts = SortOptions.coerce(options)
    matches = [entry for entry in snapshot if entry.key.startswith(prefix)]

    path = opts.path
    if path:
        keyed = [(resolve_path(entry, path), entry) for entry in matches]
        present = [(value, entry) for value, entry in keyed if value is not _MISSING]
        absent = [entry for value, entry in keyed if value is _MISSING]

        # sorted() is stable with reverse=True as well
        present.sort(key=lambda pair: _sort_key(pair[0]), reverse=opts.order == "desc")
        matches = [entry for _, entry in present] + absent
    elif opts.order == "desc":
        matches.reverse()

    if opts.limit is not None:
        matches = matches[:opts.limit]
    return matches
