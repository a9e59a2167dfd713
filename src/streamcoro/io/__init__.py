"""Runtimes for streamcoro - perform the I/O requested by coroutines."""

from ..core.model import Eof, Err, Io, Ok

# Re-export these for import convenience
from .base import SyncStream, AsyncStream, TransportError
from .stream_sync import handle, LocalStream, open_local_stream
from .stream_async import handle_async, AsyncioStream, LocalAsyncStream, open_local_stream_async
from .http_sync import HTTPStream, open_http_stream
from .http_async import HTTPAsyncStream, open_http_stream_async


def _is_url(source) -> bool:
    return str(source).startswith(('http://', 'https://'))


def open_stream(source, mode: str = "rb"):
    """Factory function to create the appropriate blocking stream for a source."""
    if hasattr(source, 'read') or hasattr(source, 'write'):  # BinaryIO
        return open_local_stream(source, mode)

    if _is_url(source):
        return open_http_stream(str(source))
    return open_local_stream(source, mode)


async def open_stream_async(source, mode: str = "rb"):
    """Factory function to create the appropriate async stream for a source."""
    if hasattr(source, 'read') or hasattr(source, 'write'):  # BinaryIO
        return await open_local_stream_async(source, mode)

    if _is_url(source):
        return await open_http_stream_async(str(source))
    return await open_local_stream_async(source, mode)


def drive(coroutine, stream) -> Ok | Eof:
    """Run `coroutine` to completion, processing its I/O with the blocking runtime.

    Coroutine errors are raised; transport errors propagate untouched.
    """
    arg = None
    while True:
        result = coroutine.resume(arg)
        if isinstance(result, Io):
            arg = handle(stream, result.io)
            continue
        if isinstance(result, Err):
            raise result.error
        return result


async def drive_async(coroutine, stream) -> Ok | Eof:
    """Run `coroutine` to completion, processing its I/O with the async runtime."""
    arg = None
    while True:
        result = coroutine.resume(arg)
        if isinstance(result, Io):
            arg = await handle_async(stream, result.io)
            continue
        if isinstance(result, Err):
            raise result.error
        return result


__all__ = [
    "SyncStream", "AsyncStream", "TransportError",
    "handle", "handle_async", "drive", "drive_async",
    "open_stream", "open_stream_async",
    "LocalStream", "LocalAsyncStream", "AsyncioStream", "HTTPStream", "HTTPAsyncStream",
]
