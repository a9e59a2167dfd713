"""I/O-free coroutine to write a whole payload, across partial writes."""

from __future__ import annotations
import logging

from ..core.model import Eof, Err, Io, Ok, StreamIo, WriteAllError, WriteZeroError
from .write import Write

logger = logging.getLogger(__name__)


class WriteAll:
    """Drive a ``Write`` coroutine until every byte has been accepted.

    Terminates with ``Ok(total)``, the amount of bytes written.
    """

    def __init__(self, data: bytes | bytearray):
        logger.debug("init coroutine to write all %d bytes", len(data))
        self._write = Write(data)
        self._remaining = len(data)
        self.total = len(data)

    def resume(self, arg: StreamIo | None = None) -> Ok | Io | Err:
        """Make the coroutine progress."""
        while True:
            if self._remaining == 0:
                return Ok(self.total)

            result = self._write.resume(arg)
            arg = None

            if isinstance(result, Io):
                return result
            if isinstance(result, Err):
                return Err(WriteAllError(result.error))
            if isinstance(result, Eof):
                written = self.total - self._remaining
                return Err(WriteZeroError(self._remaining, self.total, written))

            output = result.value
            rest = output.buffer[output.bytes_count:]
            self._remaining = len(rest)
            logger.debug("%d remaining bytes to write", self._remaining)
            self._write.replace(rest)
