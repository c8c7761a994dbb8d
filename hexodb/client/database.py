"""
HexoDB Database Client

The public async client. Each operation validates its inputs, builds a
request target, performs one GET through httpx and interprets the
response.

Usage:
    async with Database("https://hexodb.example.com/") as db:
        await db.set("foo", "bar")
        value = await db.get("foo")
"""

import logging
import time
from typing import Any, List, Mapping, Optional, Union

import httpx

from ..config.settings import settings
from ..errors import HexoShardError, HexoValueError
from ..ops.arithmetic import MathOperator, compute, resolve_operator
from ..ops.sorting import SortOptions, sort_snapshot, validate_prefix
from ..protocol.builder import RequestBuilder
from ..protocol.commands import OperationResult, Request, StoredEntry
from ..protocol.interpreter import ResponseInterpreter
from ..protocol.normalizer import (
    Number,
    is_number,
    normalize_value,
    validate_key,
    validate_value,
)

logger = logging.getLogger(__name__)


class Database:
    """
    Async client for a single HexoDB shard.

    Validation errors (HexoKeyError, HexoValueError, HexoTypeError,
    UnsupportedOperatorError) are raised before any request is sent.
    Transport and response failures raise HexoShardError. Nothing is
    retried.

    The only state held between calls is the base URL and the httpx
    client used to reach it.

    Attributes:
        url: The shard base URL, without trailing slash
    """

    def __init__(
            self,
            url: str,
            *,
            timeout: Optional[float] = None,
            transport: Optional[httpx.AsyncBaseTransport] = None,
            client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize the client.

        Args:
            url: Shard base URL, e.g. "https://hexodb.example.com/"
            timeout: Request timeout in seconds (default from settings)
            transport: Custom httpx transport, e.g. httpx.MockTransport
            client: An existing httpx.AsyncClient; it is not closed by aclose()
        """
        self._builder = RequestBuilder(url)
        self._interpreter = ResponseInterpreter()

        if client is not None:
            self._client = client
            self._owns_client = False
        else:
            self._client = httpx.AsyncClient(
                timeout=timeout if timeout is not None else settings.TIMEOUT,
                transport=transport,
            )
            self._owns_client = True

    @property
    def url(self) -> str:
        return self._builder.base_url

    def __repr__(self) -> str:
        return f"Database({self.url!r})"

    async def aclose(self) -> None:
        """Close the underlying httpx client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "Database":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def _send(self, request: Request) -> httpx.Response:
        logger.debug(f"GET {request.target}")
        try:
            return await self._client.get(request.target)
        except httpx.HTTPError as e:
            raise HexoShardError(
                f"The HexoShard could not be reached: {e}",
                target=request.target,
            ) from e

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def set(self, key: str, value: Any) -> Any:
        """
        Store a value under a key.

        Numbers are sent in canonical decimal form and structures as JSON.

        Returns:
            The shard's confirmation token
        """
        validate_key(key)
        validate_value(value)
        request = self._builder.set(key, normalize_value(value))
        response = await self._send(request)
        return self._interpreter.interpret_write(request, response).value

    async def write(self, key: str, value: Any) -> Any:
        """Alias of set()."""
        return await self.set(key, value)

    async def delete(self, key: str) -> Any:
        """Delete a key. Returns the shard's confirmation token."""
        validate_key(key)
        request = self._builder.delete(key)
        response = await self._send(request)
        return self._interpreter.interpret_write(request, response).value

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def fetch_result(self, key: str) -> OperationResult:
        """
        Fetch a key, returning a FOUND or MISSING OperationResult.

        Unlike fetch(), this distinguishes a stored null-like value from a
        missing key without relying on truthiness.
        """
        validate_key(key)
        request = self._builder.fetch(key)
        response = await self._send(request)
        return self._interpreter.interpret_read(request, response)

    async def fetch(self, key: str) -> Any:
        """Return the value stored under key, or None if there is none."""
        result = await self.fetch_result(key)
        return result.value if result.is_found else None

    async def get(self, key: str) -> Any:
        """Alias of fetch()."""
        return await self.fetch(key)

    async def exists(self, key: str) -> bool:
        """
        Check whether a value is stored under key.

        Stored falsy values such as 0, "" or false count as existing.
        """
        result = await self.fetch_result(key)
        return result.is_found

    async def has(self, key: str) -> bool:
        """Alias of exists()."""
        return await self.exists(key)

    async def all(self) -> List[StoredEntry]:
        """Return every entry in the shard, in the order the shard lists them."""
        request = self._builder.fetch_all()
        response = await self._send(request)
        return self._interpreter.interpret_snapshot(request, response)

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    async def math(self, key: str, operator: Union[str, MathOperator], value: Number) -> Any:
        """
        Apply an arithmetic update to a stored number.

        The current value is fetched, combined with value and written
        back. If nothing is stored yet, value itself is written. This is
        two requests with no isolation: concurrent updates to the same key
        can overwrite each other.

        Args:
            key: Key of the stored number
            operator: One of + - * / or add, sub(tract), mul(tiply), div(ide)
            value: The right-hand operand

        Returns:
            The shard's confirmation token for the final write

        Raises:
            UnsupportedOperatorError: unknown operator
            HexoValueError: value is missing or not a number
            NotANumberError: the stored value is not numeric
            ZeroDivisionError: dividing an existing value by zero
        """
        validate_key(key)
        op = resolve_operator(operator)
        validate_value(value)
        if not is_number(value):
            raise HexoValueError("Invalid value specified! Expected a number.")

        current = await self.fetch_result(key)
        if current.is_missing:
            logger.debug(f"{key!r} not found, writing initial value")
            return await self.set(key, value)

        return await self.set(key, compute(current.value, op, value))

    async def add(self, key: str, value: Number) -> Any:
        """Add value to the number stored under key."""
        return await self.math(key, MathOperator.ADD, value)

    async def subtract(self, key: str, value: Number) -> Any:
        """Subtract value from the number stored under key."""
        return await self.math(key, MathOperator.SUBTRACT, value)

    async def multiply(self, key: str, value: Number) -> Any:
        return await self.math(key, MathOperator.MULTIPLY, value)

    async def divide(self, key: str, value: Number) -> Any:
        return await self.math(key, MathOperator.DIVIDE, value)

    # ------------------------------------------------------------------
    # Snapshot queries
    # ------------------------------------------------------------------

    async def starts_with(
            self,
            prefix: str,
            options: Union[SortOptions, Mapping[str, Any], None] = None,
            **kwargs: Any,
    ) -> List[StoredEntry]:
        """
        Fetch everything and return the entries whose key starts with prefix.

        Args:
            prefix: Key prefix to match
            options: SortOptions or a mapping such as {"sort": ".data.score"}
            **kwargs: Individual options (sort, order, limit), overriding options

        Examples:
            >>> await db.starts_with("money", sort=".data", order="desc")
        """
        validate_prefix(prefix)

        opts = SortOptions.coerce(options)
        if kwargs:
            merged = {"sort": opts.sort, "order": opts.order, "limit": opts.limit}
            merged.update(kwargs)
            opts = SortOptions.coerce(merged)

        snapshot = await self.all()
        return sort_snapshot(prefix, snapshot, opts)

    async def ping(self) -> int:
        """
        Return the shard latency in milliseconds.

        Computed as local time minus the server-reported timestamp. Clock
        skew can make this negative; such results are clamped to 0.
        """
        request = self._builder.latency()
        response = await self._send(request)
        server_ms = self._interpreter.interpret_latency(request, response)

        elapsed = int(time.time() * 1000) - server_ms
        if elapsed < 0:
            logger.debug(f"Shard clock is {-elapsed}ms ahead, clamping ping to 0")
            return 0
        return elapsed
