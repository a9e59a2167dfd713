"""The standard, blocking stream runtime."""

from __future__ import annotations
import logging
import socket
from pathlib import Path
from typing import BinaryIO, Union

from ..core.model import StreamIo, StreamOutput

logger = logging.getLogger(__name__)


def handle(stream, request: StreamIo) -> StreamIo:
    """Process `request` against a blocking stream and return the response.

    Works with buffered/raw file objects, sockets and anything that
    implements ``readinto``/``write``.
    """
    if request.is_read:
        return read(stream, request)
    return write(stream, request)


def read(stream, request: StreamIo) -> StreamIo:
    if request.is_response:
        return request

    buffer = request.buffer
    logger.debug("reading bytes synchronously")
    if isinstance(stream, socket.socket):
        bytes_count = stream.recv_into(buffer)
    elif hasattr(stream, "readinto"):
        bytes_count = stream.readinto(buffer)
    else:
        data = stream.read(len(buffer))
        bytes_count = None if data is None else len(data)
        if bytes_count:
            buffer[:bytes_count] = data

    # non-blocking stream with nothing available yet
    if bytes_count is None:
        return request

    return StreamIo.read_response(StreamOutput(buffer, bytes_count))


def write(stream, request: StreamIo) -> StreamIo:
    if request.is_response:
        return request

    data = request.buffer
    logger.debug("writing bytes synchronously")
    if isinstance(stream, socket.socket):
        bytes_count = stream.send(data)
    else:
        bytes_count = stream.write(data)

    if bytes_count is None:
        return request

    return StreamIo.write_response(StreamOutput(data, bytes_count))


class LocalStream:
    """Blocking stream over a local file path or an already open binary file."""

    def __init__(self, source: Union[Path, str, BinaryIO], mode: str = "rb"):
        if hasattr(source, "read") or hasattr(source, "write"):
            self._file = source
            self._should_close_file = False
        else:
            self._file = open(source, mode)
            self._should_close_file = True
        self.bytes_read = 0
        self.bytes_written = 0

    def readinto(self, buffer: bytearray) -> int | None:
        if hasattr(self._file, "readinto"):
            bytes_count = self._file.readinto(buffer)
        else:
            data = self._file.read(len(buffer))
            bytes_count = None if data is None else len(data)
            if bytes_count:
                buffer[:bytes_count] = data
        if bytes_count:
            self.bytes_read += bytes_count
        return bytes_count

    def write(self, data: bytes) -> int | None:
        bytes_count = self._file.write(data)
        if bytes_count:
            self.bytes_written += bytes_count
        return bytes_count

    def flush(self) -> None:
        if hasattr(self._file, "flush"):
            self._file.flush()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        """Close the file if we opened it."""
        if self._should_close_file and self._file is not None:
            self._file.close()
            self._file = None


def open_local_stream(source: Union[Path, str, BinaryIO], mode: str = "rb") -> LocalStream:
    """Create a blocking local stream."""
    return LocalStream(source, mode)
