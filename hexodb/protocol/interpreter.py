"""
Response Interpreter Module

Turns shard responses into OperationResults, snapshots and timestamps.

A response that is not a 2xx, is not JSON, or does not have the expected
shape means the shard is unreachable or misconfigured and raises
HexoShardError. A well-formed fetch response without data is a valid
MISSING result, never an error.
"""

import logging
from typing import Any, List

import httpx

from ..errors import HexoShardError
from .commands import OperationResult, Request, StoredEntry

logger = logging.getLogger(__name__)


class ResponseInterpreter:
    """Interprets httpx responses for each operation type."""

    def parse_body(self, request: Request, response: httpx.Response) -> Any:
        """
        Decode the JSON body of a response.

        Raises:
            HexoShardError: non-2xx status or a body that is not JSON
        """
        if not response.is_success:
            raise HexoShardError(
                f"The HexoShard URL is invalid! Received HTTP {response.status_code}.",
                target=request.target,
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise HexoShardError(
                "The HexoShard URL is invalid! No data was found.",
                target=request.target,
                status_code=response.status_code,
            ) from e

    def _expect_object(self, request: Request, response: httpx.Response) -> dict:
        body = self.parse_body(request, response)
        if not isinstance(body, dict):
            raise HexoShardError(
                f"Unexpected {request.operation.value} response: expected an object, "
                f"got {type(body).__name__}",
                target=request.target,
                status_code=response.status_code,
            )
        return body

    def interpret_write(self, request: Request, response: httpx.Response) -> OperationResult:
        """Interpret a set/delete response; the body must carry `operation`."""
        body = self._expect_object(request, response)
        if "operation" not in body:
            raise HexoShardError(
                "The HexoShard URL is invalid! No confirmation was returned.",
                target=request.target,
                status_code=response.status_code,
            )
        return OperationResult.confirmed(body["operation"])

    def interpret_read(self, request: Request, response: httpx.Response) -> OperationResult:
        """Interpret a fetch response; absent or null `data` means MISSING."""
        body = self._expect_object(request, response)
        data = body.get("data")
        if data is None:
            logger.debug(f"No data stored for {request.key!r}")
            return OperationResult.missing()
        return OperationResult.found(data)

    def interpret_snapshot(self, request: Request, response: httpx.Response) -> List[StoredEntry]:
        """
        Interpret a fetchall response.

        Accepts either a list of {"key"|"ID": ..., "data": ...} objects or a
        single object mapping key -> data. Order is preserved as received.
        """
        body = self.parse_body(request, response)

        if isinstance(body, dict):
            return [StoredEntry(key=str(key), data=data) for key, data in body.items()]

        if not isinstance(body, list):
            raise HexoShardError(
                f"Unexpected fetchall response: expected a list, got {type(body).__name__}",
                target=request.target,
                status_code=response.status_code,
            )

        entries = []
        for item in body:
            if not isinstance(item, dict):
                raise HexoShardError(
                    "Unexpected fetchall entry: expected an object",
                    target=request.target,
                    status_code=response.status_code,
                )
            key = item.get("key", item.get("ID"))
            if key is None:
                raise HexoShardError(
                    "Unexpected fetchall entry: missing key",
                    target=request.target,
                    status_code=response.status_code,
                )
            entries.append(StoredEntry(key=str(key), data=item.get("data")))
        return entries

    def interpret_latency(self, request: Request, response: httpx.Response) -> int:
        """Return the server timestamp (ms since epoch) from a latency response."""
        body = self._expect_object(request, response)
        raw = body.get("ping")
        if isinstance(raw, bool):
            raw = None

        try:
            return int(raw)
        except (TypeError, ValueError) as e:
            raise HexoShardError(
                f"Unexpected latency response: invalid ping {raw!r}",
                target=request.target,
                status_code=response.status_code,
            ) from e
