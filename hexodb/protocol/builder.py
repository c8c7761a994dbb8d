"""
Request Builder Module

Composes the request target for each remote operation. Building a target
has no side effects; the network call itself belongs to the transport.
"""

from typing import Optional
from urllib.parse import quote

from ..errors import HexoKeyError, HexoValueError
from .commands import OperationType, Request


class RequestBuilder:
    """
    Builder for the HexoDB shard URL protocol.

    Protocol Format:
        GET {base}/set?{key}={value}  -> {"operation": <confirmation>}
        GET {base}/delete?{key}       -> {"operation": <confirmation>}
        GET {base}/fetch?{key}        -> {"data": <value|absent>}
        GET {base}/fetchall           -> [{"key": ..., "data": ...}, ...]
        GET {base}/latency            -> {"ping": "<server time in ms>"}

    Keys and values are percent-encoded, so the shard decodes exactly the
    key that was validated on the client.
    """

    def __init__(self, base_url: str):
        """
        Args:
            base_url: Shard base URL; trailing slashes are ignored
        """
        if not isinstance(base_url, str) or not base_url.strip():
            raise HexoValueError("Invalid shard URL provided!")
        self.base_url = base_url.strip().rstrip("/")

    @staticmethod
    def encode(text: str) -> str:
        return quote(text, safe="")

    def build(
            self,
            operation: OperationType,
            key: str = "",
            value: Optional[str] = None,
    ) -> Request:
        """
        Build the request for an operation.

        Args:
            operation: The remote operation
            key: An already validated key (keyed operations only)
            value: An already normalized value (SET only)

        Returns:
            Request carrying the full target URL

        Examples:
            >>> builder = RequestBuilder("https://shard.example/")
            >>> builder.build(OperationType.SET, "foo", "bar").target
            'https://shard.example/set?foo=bar'
            >>> builder.build(OperationType.FETCH_ALL).target
            'https://shard.example/fetchall'
        """
        target = self.base_url + operation.path

        if operation.needs_key:
            if not key:
                raise HexoKeyError(f"{operation.value} requires a key")
            target += "?" + self.encode(key)

        if operation == OperationType.SET:
            if value is None:
                raise HexoValueError("set requires a value")
            target += "=" + self.encode(value)

        return Request(operation=operation, target=target, key=key)

    def set(self, key: str, value: str) -> Request:
        return self.build(OperationType.SET, key, value)

    def delete(self, key: str) -> Request:
        return self.build(OperationType.DELETE, key)

    def fetch(self, key: str) -> Request:
        return self.build(OperationType.FETCH, key)

    def fetch_all(self) -> Request:
        return self.build(OperationType.FETCH_ALL)

    def latency(self) -> Request:
        return self.build(OperationType.LATENCY)
