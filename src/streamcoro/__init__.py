"""streamcoro - I/O-free, resumable stream coroutines and their runtimes."""

from .core.model import (                                             # re-export
    StreamIo, StreamOutput, IoKind, Ok, Io, Eof, Err,
    StreamError, InvalidArgumentError, ReadExactError, UnexpectedEofError,
    ReadToEndError, WriteAllError, WriteZeroError,
)
from .coroutines import Read, Write, ReadExact, ReadToEnd, WriteAll
from .io import open_stream, open_stream_async, drive, drive_async


async def read_to_end(source, *, capacity: int = Read.DEFAULT_CAPACITY) -> bytes:
    """Read a source (path, URL, or file-like object) asynchronously until EOF."""
    stream = await open_stream_async(source)
    try:
        return (await drive_async(ReadToEnd(capacity), stream)).value
    finally:
        await stream.close()


def read_to_end_sync(source, *, capacity: int = Read.DEFAULT_CAPACITY) -> bytes:
    """Read a source (path, URL, or file-like object) synchronously until EOF."""
    stream = open_stream(source)
    try:
        return drive(ReadToEnd(capacity), stream).value
    finally:
        stream.close()


async def read_exact(source, size: int, *, capacity: int = Read.DEFAULT_CAPACITY) -> bytes:
    """Read exactly `size` bytes from a source asynchronously.

    Raises ``UnexpectedEofError`` (carrying the partial bytes) if the
    source is shorter.
    """
    stream = await open_stream_async(source)
    try:
        return (await drive_async(ReadExact(size, capacity), stream)).value
    finally:
        await stream.close()


def read_exact_sync(source, size: int, *, capacity: int = Read.DEFAULT_CAPACITY) -> bytes:
    """Read exactly `size` bytes from a source synchronously."""
    stream = open_stream(source)
    try:
        return drive(ReadExact(size, capacity), stream).value
    finally:
        stream.close()


async def write_all(sink, data: bytes) -> int:
    """Write the whole of `data` to a sink (path or file-like object) asynchronously."""
    stream = await open_stream_async(sink, "wb")
    try:
        written = (await drive_async(WriteAll(data), stream)).value
        await stream.flush()
        return written
    finally:
        await stream.close()


def write_all_sync(sink, data: bytes) -> int:
    """Write the whole of `data` to a sink (path or file-like object) synchronously."""
    stream = open_stream(sink, "wb")
    try:
        written = drive(WriteAll(data), stream).value
        stream.flush()
        return written
    finally:
        stream.close()


__all__ = [
    "read_to_end", "read_to_end_sync", "read_exact", "read_exact_sync",
    "write_all", "write_all_sync",
    "Read", "Write", "ReadExact", "ReadToEnd", "WriteAll",
    "StreamIo", "StreamOutput", "IoKind", "Ok", "Io", "Eof", "Err",
    "StreamError", "InvalidArgumentError", "ReadExactError", "UnexpectedEofError",
    "ReadToEndError", "WriteAllError", "WriteZeroError",
    "drive", "drive_async",
]
