"""Shared harness: drive coroutines against in-memory streams."""

import io

from streamcoro.core.model import Io, StreamIo, StreamOutput


def read_response(stream, request: StreamIo) -> StreamIo:
    """Fill the request buffer from `stream`, like a blocking runtime would."""
    buffer = request.buffer
    bytes_count = stream.readinto(buffer)
    return StreamIo.read_response(StreamOutput(buffer, bytes_count))


def run(coroutine, stream, arg=None):
    """Resume `coroutine` until it stops asking for I/O.

    Returns the terminal result and the number of I/O requests served.
    """
    requests = 0
    while True:
        result = coroutine.resume(arg)
        if not isinstance(result, Io):
            return result, requests
        requests += 1
        io_ = result.io
        if io_.is_read:
            arg = read_response(stream, io_)
        else:
            bytes_count = stream.write(io_.buffer)
            arg = StreamIo.write_response(StreamOutput(io_.buffer, bytes_count))


class TrickleStream(io.RawIOBase):
    """Raw stream moving at most `step` bytes per read or write call."""

    def __init__(self, data: bytes = b"", step: int = 1, limit: int | None = None):
        self._source = io.BytesIO(data)
        self.sink = bytearray()
        self.step = step
        self.limit = limit
        self.calls = 0

    def readable(self):
        return True

    def writable(self):
        return True

    def readinto(self, buffer):
        self.calls += 1
        chunk = self._source.read(min(len(buffer), self.step))
        buffer[:len(chunk)] = chunk
        return len(chunk)

    def write(self, data):
        self.calls += 1
        if self.limit is not None:
            accepted = max(0, min(self.step, len(data), self.limit - len(self.sink)))
        else:
            accepted = min(self.step, len(data))
        self.sink.extend(data[:accepted])
        return accepted

    def remaining(self) -> bytes:
        return self._source.read()


class WouldBlockStream(io.RawIOBase):
    """Raw stream that reports "would block" (None) a few times before serving."""

    def __init__(self, data: bytes, blocks: int = 1):
        self._source = io.BytesIO(data)
        self.blocks = blocks

    def readable(self):
        return True

    def writable(self):
        return True

    def readinto(self, buffer):
        if self.blocks:
            self.blocks -= 1
            return None
        chunk = self._source.read(len(buffer))
        buffer[:len(chunk)] = chunk
        return len(chunk)

    def write(self, data):
        if self.blocks:
            self.blocks -= 1
            return None
        return len(data)
