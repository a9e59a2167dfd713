"""Base protocols and shared types for the runtime layer."""

from typing import Protocol, runtime_checkable


class TransportError(IOError):
    """Raised when the underlying transport fails (connection reset, HTTP error...)."""


HTTP_CHUNK_SIZE = 64 * 1024  # bytes pulled from an HTTP body per network read
HTTP_TIMEOUT = 60.0


@runtime_checkable
class SyncStream(Protocol):
    """Protocol for blocking streams processed by the sync runtime."""

    def readinto(self, buffer: bytearray) -> int | None:
        """Read at most `len(buffer)` bytes into `buffer`, return the count (0 on EOF)."""
        ...

    def write(self, data: bytes) -> int | None:
        """Write up to `len(data)` bytes, return the count actually written."""
        ...


@runtime_checkable
class AsyncStream(Protocol):
    """Protocol for streams processed by the async runtime."""

    async def readinto(self, buffer: bytearray) -> int:
        ...

    async def write(self, data: bytes) -> int:
        ...
