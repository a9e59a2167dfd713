"""I/O-free coroutine to read bytes until a given amount is reached."""

from __future__ import annotations
import logging
from typing import Iterable

from ..core.model import Eof, Err, Io, Ok, ReadExactError, StreamIo, UnexpectedEofError
from .read import Read

logger = logging.getLogger(__name__)


class ReadExact:
    """Read exactly `max_bytes` bytes by driving a ``Read`` coroutine.

    The inner read buffer is never bigger than what remains to be read,
    so bytes past the target are left untouched in the stream.
    """

    def __init__(self, max_bytes: int, capacity: int = Read.DEFAULT_CAPACITY):
        if max_bytes < 0:
            raise ValueError(f"max_bytes cannot be negative, got {max_bytes}")
        if capacity <= 0 and max_bytes > 0:
            raise ValueError(f"capacity must be positive, got {capacity}")
        logger.debug("init coroutine to read exactly %d bytes (capacity: %d)", max_bytes, capacity)
        self._read = Read(min(capacity, max_bytes))
        self._buffer = bytearray()
        self.max_bytes = max_bytes

    @classmethod
    def with_capacity(cls, capacity: int, max_bytes: int) -> ReadExact:
        return cls(max_bytes, capacity)

    def extend(self, data: Iterable[int]) -> None:
        """Seed already known bytes, counting toward `max_bytes`."""
        self._buffer.extend(data)

    def resume(self, arg: StreamIo | None = None) -> Ok | Io | Err:
        """Make the coroutine progress."""
        while True:
            if len(self._buffer) >= self.max_bytes:
                data, self._buffer = bytes(self._buffer), bytearray()
                return Ok(data)

            remaining = self.max_bytes - len(self._buffer)
            logger.debug("%d remaining bytes to read", remaining)

            if remaining < self._read.capacity():
                self._read.truncate(remaining)

            result = self._read.resume(arg)
            arg = None

            if isinstance(result, Io):
                return result
            if isinstance(result, Err):
                return Err(ReadExactError(result.error))
            if isinstance(result, Eof):
                partial, self._buffer = bytes(self._buffer), bytearray()
                return Err(UnexpectedEofError(remaining, self.max_bytes, partial))

            output = result.value
            self._buffer.extend(output.bytes())
            self._read.replace(output.buffer)
