"""I/O-free coroutine to read bytes into a buffer."""

from __future__ import annotations
import logging

from ..core.model import Eof, Err, InvalidArgumentError, Io, Ok, StreamIo

logger = logging.getLogger(__name__)


class Read:
    """Read once from a stream into an owned buffer.

    The buffer is lent to the runtime with the read request and comes
    back inside the response. While the request is in flight the
    coroutine holds no buffer at all.
    """

    DEFAULT_CAPACITY = 8 * 1024

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if capacity < 0:
            raise ValueError(f"capacity cannot be negative, got {capacity}")
        logger.debug("init coroutine to read bytes (capacity: %d)", capacity)
        self._capacity = capacity
        self._buffer: bytearray | None = bytearray(capacity)

    @classmethod
    def with_capacity(cls, capacity: int) -> Read:
        return cls(capacity)

    def capacity(self) -> int:
        """Return the configured buffer size."""
        return self._capacity

    def truncate(self, length: int) -> None:
        """Shorten the buffer to at most `length` bytes."""
        if length < self._capacity:
            self._capacity = max(length, 0)
            if self._buffer is not None:
                del self._buffer[self._capacity:]

    def replace(self, buffer: bytearray | bytes) -> None:
        """Install a buffer of the caller's choosing, zero-filled."""
        if isinstance(buffer, bytearray):
            buffer[:] = bytes(len(buffer))
        else:
            buffer = bytearray(len(buffer))
        self._buffer = buffer
        self._capacity = len(buffer)

    def resume(self, arg: StreamIo | None = None) -> Ok | Io | Eof | Err:
        """Make the read progress."""
        if arg is None:
            buffer = self._buffer
            if buffer is None:
                buffer = bytearray(self._capacity)
            self._buffer = None
            logger.debug("wants I/O to read bytes")
            return Io(StreamIo.read_request(buffer))

        logger.debug("resume after reading bytes")

        if not arg.is_read:
            return Err(InvalidArgumentError("read output", arg))

        if arg.is_request:
            return Io(arg)

        output = arg.output
        if output.bytes_count == 0:
            self.replace(output.buffer)
            return Eof()

        logger.debug("read %d/%d bytes", output.bytes_count, len(output.buffer))
        return Ok(output)

    def __repr__(self) -> str:
        state = "suspended" if self._buffer is None else "ready"
        return f"<Read capacity={self._capacity} {state}>"
