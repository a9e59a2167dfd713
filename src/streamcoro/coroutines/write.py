"""I/O-free coroutine to write bytes into a stream."""

from __future__ import annotations
import logging

from ..core.model import Eof, Err, InvalidArgumentError, Io, Ok, StreamIo

logger = logging.getLogger(__name__)


class Write:
    """Hand a whole payload to the runtime in a single write request.

    Partial writes are reported as-is; retrying the remainder is the
    job of ``WriteAll``.
    """

    def __init__(self, data: bytes | bytearray = b""):
        logger.debug("init coroutine for writing %d bytes", len(data))
        self._data = data

    def replace(self, data: bytes | bytearray) -> None:
        """Replace the pending payload."""
        logger.debug("prepare %d bytes to be written", len(data))
        self._data = data

    def resume(self, arg: StreamIo | None = None) -> Ok | Io | Eof | Err:
        """Make the write progress."""
        if arg is None:
            data, self._data = self._data, b""
            logger.debug("wants I/O to write bytes")
            return Io(StreamIo.write_request(data))

        logger.debug("resume after writing bytes")

        if not arg.is_write:
            return Err(InvalidArgumentError("write output", arg))

        if arg.is_request:
            return Io(arg)

        output = arg.output
        if output.bytes_count == 0:
            return Eof()

        logger.debug("wrote %d bytes", output.bytes_count)
        return Ok(output)
