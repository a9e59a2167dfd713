"""The asyncio-based stream runtime."""

from __future__ import annotations
import asyncio
import logging
from pathlib import Path
from typing import BinaryIO, Union

from ..core.model import StreamIo, StreamOutput
from .stream_sync import LocalStream

logger = logging.getLogger(__name__)


async def handle_async(stream, request: StreamIo) -> StreamIo:
    """Process `request` against an ``AsyncStream`` and return the response."""
    if request.is_read:
        return await read_async(stream, request)
    return await write_async(stream, request)


async def read_async(stream, request: StreamIo) -> StreamIo:
    if request.is_response:
        return request

    buffer = request.buffer
    logger.debug("reading bytes asynchronously")
    bytes_count = await stream.readinto(buffer)
    if bytes_count is None:
        return request
    return StreamIo.read_response(StreamOutput(buffer, bytes_count))


async def write_async(stream, request: StreamIo) -> StreamIo:
    if request.is_response:
        return request

    data = request.buffer
    logger.debug("writing bytes asynchronously")
    bytes_count = await stream.write(data)
    if bytes_count is None:
        return request
    return StreamIo.write_response(StreamOutput(data, bytes_count))


class AsyncioStream:
    """Async stream over an asyncio ``StreamReader``/``StreamWriter`` pair.

    Either side may be omitted for one-way streams.
    """

    def __init__(self, reader: asyncio.StreamReader | None = None,
                 writer: asyncio.StreamWriter | None = None):
        self._reader = reader
        self._writer = writer

    async def readinto(self, buffer: bytearray) -> int:
        if self._reader is None:
            raise OSError("stream is not readable")
        data = await self._reader.read(len(buffer))
        buffer[:len(data)] = data
        return len(data)

    async def write(self, data: bytes) -> int:
        if self._writer is None:
            raise OSError("stream is not writable")
        if self._writer.is_closing():
            return 0
        self._writer.write(data)
        await self._writer.drain()
        return len(data)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        if self._writer is not None:
            self._writer.close()
            await self._writer.wait_closed()


class LocalAsyncStream:
    """Asynchronous local stream - thin wrapper around the blocking one."""

    def __init__(self, source: Union[Path, str, BinaryIO], mode: str = "rb"):
        self._sync_stream = LocalStream(source, mode)

    @property
    def bytes_read(self) -> int:
        return self._sync_stream.bytes_read

    @property
    def bytes_written(self) -> int:
        return self._sync_stream.bytes_written

    async def readinto(self, buffer: bytearray) -> int | None:
        return await asyncio.to_thread(self._sync_stream.readinto, buffer)

    async def write(self, data: bytes) -> int | None:
        return await asyncio.to_thread(self._sync_stream.write, data)

    async def flush(self) -> None:
        await asyncio.to_thread(self._sync_stream.flush)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        """Close the underlying blocking stream."""
        await asyncio.to_thread(self._sync_stream.close)


async def open_local_stream_async(source: Union[Path, str, BinaryIO], mode: str = "rb") -> LocalAsyncStream:
    """Create an asynchronous local stream."""
    return LocalAsyncStream(source, mode)
