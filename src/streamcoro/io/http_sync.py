"""Synchronous HTTP body stream using requests."""

from __future__ import annotations
import io
import logging

import requests

from .base import HTTP_CHUNK_SIZE, HTTP_TIMEOUT, TransportError

logger = logging.getLogger(__name__)


# Module-level session for connection pooling
_session = None


def _get_session():
    """Get or create the global requests session."""
    global _session
    if _session is None:
        _session = requests.Session()
    return _session


class HTTPStream:
    """Read-only blocking stream over the body of an HTTP GET response."""

    def __init__(self, url: str, chunk_size: int = HTTP_CHUNK_SIZE):
        self.url = url
        self.bytes_read = 0
        self.content_length: int | None = None
        self._chunk_size = chunk_size
        self._pending = b""
        self._response = None
        self._chunks = None

    def _ensure_response(self):
        """Send the GET request on first access."""
        if self._response is not None:
            return

        logger.debug("sending GET %s", self.url)
        try:
            response = _get_session().get(self.url, stream=True, timeout=HTTP_TIMEOUT)
        except requests.RequestException as e:
            raise TransportError(f"GET request failed: {e}") from e

        if response.status_code >= 400:
            response.close()
            raise TransportError(f"GET request failed with status {response.status_code}")

        content_length_header = response.headers.get("content-length")
        if content_length_header:
            self.content_length = int(content_length_header)

        self._response = response
        self._chunks = response.iter_content(self._chunk_size)

    def readinto(self, buffer: bytearray) -> int:
        """Copy at most `len(buffer)` body bytes into `buffer`, 0 at end of body."""
        self._ensure_response()

        try:
            while not self._pending:
                chunk = next(self._chunks, None)
                if chunk is None:
                    break
                self._pending = chunk
        except requests.RequestException as e:
            raise TransportError(f"reading body of {self.url} failed: {e}") from e

        bytes_count = min(len(buffer), len(self._pending))
        buffer[:bytes_count] = self._pending[:bytes_count]
        self._pending = self._pending[bytes_count:]
        self.bytes_read += bytes_count
        return bytes_count

    def write(self, data: bytes) -> int:
        raise io.UnsupportedOperation("HTTP body streams are read-only")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        """Release the connection back to the shared session."""
        if self._response is not None:
            self._response.close()
            self._response = None
            self._chunks = None


def open_http_stream(url: str) -> HTTPStream:
    """Create a synchronous HTTP body stream."""
    return HTTPStream(url)
