"""I/O-free coroutine to read bytes until EOF."""

from __future__ import annotations
import logging
from typing import Iterable

from ..core.model import Eof, Err, Io, Ok, ReadToEndError, StreamIo
from .read import Read

logger = logging.getLogger(__name__)


class ReadToEnd:
    """Accumulate everything a stream yields until it reports EOF."""

    def __init__(self, capacity: int = Read.DEFAULT_CAPACITY):
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")
        logger.debug("init coroutine to read until EOF (capacity: %d)", capacity)
        self._read = Read(capacity)
        self._buffer = bytearray()

    @classmethod
    def with_capacity(cls, capacity: int) -> ReadToEnd:
        return cls(capacity)

    def extend(self, data: Iterable[int]) -> None:
        """Seed already known bytes."""
        self._buffer.extend(data)

    def resume(self, arg: StreamIo | None = None) -> Ok | Io | Err:
        """Make the coroutine progress."""
        while True:
            result = self._read.resume(arg)
            arg = None

            if isinstance(result, Io):
                return result
            if isinstance(result, Err):
                return Err(ReadToEndError(result.error))
            if isinstance(result, Eof):
                data, self._buffer = bytes(self._buffer), bytearray()
                return Ok(data)

            output = result.value
            self._buffer.extend(output.bytes())
            self._read.replace(output.buffer)
