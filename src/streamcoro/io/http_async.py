"""Asynchronous HTTP body stream using httpx."""

from __future__ import annotations
import io
import logging

import httpx

from .base import HTTP_CHUNK_SIZE, HTTP_TIMEOUT, TransportError

logger = logging.getLogger(__name__)


class HTTPAsyncStream:
    """Read-only async stream over the body of an HTTP GET response.

    Each stream owns its client: an ``httpx.AsyncClient`` is bound to the
    event loop it was first used on.
    """

    def __init__(self, url: str, chunk_size: int = HTTP_CHUNK_SIZE):
        self.url = url
        self.bytes_read = 0
        self.content_length: int | None = None
        self._chunk_size = chunk_size
        self._pending = b""
        self._client: httpx.AsyncClient | None = None
        self._response: httpx.Response | None = None
        self._chunks = None

    async def _ensure_response(self):
        """Send the GET request on first access."""
        if self._response is not None:
            return

        logger.debug("sending GET %s", self.url)
        self._client = httpx.AsyncClient(timeout=HTTP_TIMEOUT)
        try:
            request = self._client.build_request("GET", self.url)
            response = await self._client.send(request, stream=True)
        except httpx.HTTPError as e:
            await self.close()
            raise TransportError(f"GET request failed: {e}") from e

        if response.status_code >= 400:
            await response.aclose()
            await self.close()
            raise TransportError(f"GET request failed with status {response.status_code}")

        content_length_header = response.headers.get("content-length")
        if content_length_header:
            self.content_length = int(content_length_header)

        self._response = response
        self._chunks = response.aiter_bytes(self._chunk_size)

    async def readinto(self, buffer: bytearray) -> int:
        """Copy at most `len(buffer)` body bytes into `buffer`, 0 at end of body."""
        await self._ensure_response()

        try:
            while not self._pending:
                chunk = await anext(self._chunks, None)
                if chunk is None:
                    break
                self._pending = chunk
        except httpx.HTTPError as e:
            raise TransportError(f"reading body of {self.url} failed: {e}") from e

        bytes_count = min(len(buffer), len(self._pending))
        buffer[:bytes_count] = self._pending[:bytes_count]
        self._pending = self._pending[bytes_count:]
        self.bytes_read += bytes_count
        return bytes_count

    async def write(self, data: bytes) -> int:
        raise io.UnsupportedOperation("HTTP body streams are read-only")

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        """Close the response and the client owning the connection."""
        if self._response is not None:
            await self._response.aclose()
            self._response = None
            self._chunks = None
        if self._client is not None:
            await self._client.aclose()
            self._client = None


async def open_http_stream_async(url: str) -> HTTPAsyncStream:
    """Create an asynchronous HTTP body stream."""
    return HTTPAsyncStream(url)
