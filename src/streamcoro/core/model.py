"""Stream I/O requests, responses and coroutine step results."""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any


@dataclass(slots=True)
class StreamOutput:
    """Result of a read or write: the buffer used and how many bytes moved."""

    buffer: bytearray | bytes
    bytes_count: int

    def __post_init__(self) -> None:
        if not 0 <= self.bytes_count <= len(self.buffer):
            raise ValueError(
                f"bytes_count must be within 0..{len(self.buffer)}, got {self.bytes_count}"
            )

    def bytes(self) -> bytes:
        """Return the exact read/written bytes."""
        return bytes(self.buffer[:self.bytes_count])


class IoKind(Enum):
    READ = "read"
    WRITE = "write"


@dataclass(slots=True)
class StreamIo:
    """I/O request or response exchanged between coroutines and runtimes.

    A request carries the buffer to fill (read) or drain (write); a
    response carries the ``StreamOutput`` of the performed operation,
    built around that same buffer.
    """

    kind: IoKind
    payload: StreamOutput | bytearray | bytes

    @classmethod
    def read_request(cls, buffer: bytearray) -> StreamIo:
        return cls(IoKind.READ, buffer)

    @classmethod
    def read_response(cls, output: StreamOutput) -> StreamIo:
        return cls(IoKind.READ, output)

    @classmethod
    def write_request(cls, data: bytes | bytearray) -> StreamIo:
        return cls(IoKind.WRITE, data)

    @classmethod
    def write_response(cls, output: StreamOutput) -> StreamIo:
        return cls(IoKind.WRITE, output)

    @property
    def is_read(self) -> bool:
        return self.kind is IoKind.READ

    @property
    def is_write(self) -> bool:
        return self.kind is IoKind.WRITE

    @property
    def is_response(self) -> bool:
        return isinstance(self.payload, StreamOutput)

    @property
    def is_request(self) -> bool:
        return not self.is_response

    @property
    def buffer(self) -> bytearray | bytes:
        """Buffer carried by a request."""
        if self.is_response:
            raise ValueError(f"{self!r} carries an output, not a buffer")
        return self.payload

    @property
    def output(self) -> StreamOutput:
        """Output carried by a response."""
        if not self.is_response:
            raise ValueError(f"{self!r} carries a buffer, not an output")
        return self.payload

    def __repr__(self) -> str:
        if self.is_response:
            out = self.payload
            return f"<StreamIo {self.kind.value} response ({out.bytes_count}/{len(out.buffer)} bytes)>"
        return f"<StreamIo {self.kind.value} request ({len(self.payload)} bytes)>"


# --- coroutine step results ---

@dataclass(slots=True)
class Ok:
    """The coroutine terminated successfully."""
    value: Any


@dataclass(slots=True)
class Io:
    """The coroutine needs the runtime to process ``io`` before progressing."""
    io: StreamIo


@dataclass(slots=True)
class Eof:
    """The stream reached End Of File. Only the consumer knows if it is an error."""


@dataclass(slots=True)
class Err:
    """The coroutine failed."""
    error: StreamError


# --- errors ---

class StreamError(RuntimeError):
    """Base class for errors reported by stream coroutines."""


class InvalidArgumentError(StreamError):
    """Raised when a coroutine is resumed with an I/O shaped for another operation.

    This is a bug in the driving code (the runtime mapped the wrong
    response back), never a transient condition.
    """

    def __init__(self, expected: str, got: StreamIo):
        super().__init__(f"Invalid argument: expected {expected}, got {got!r}")
        self.expected = expected
        self.got = got


class _ComposedError(StreamError):
    """Error of a composed coroutine, optionally wrapping the inner one."""

    def __init__(self, source: StreamError | None = None, message: str | None = None):
        super().__init__(message if message is not None else str(source))
        self.source = source
        self.__cause__ = source


class ReadExactError(_ComposedError):
    """Error raised by the read-exact coroutine."""


class UnexpectedEofError(ReadExactError):
    """EOF was reached before the expected amount of bytes was read.

    ``partial`` holds the bytes collected so far, so the caller may
    still decide that a short read is acceptable.
    """

    def __init__(self, remaining: int, expected: int, partial: bytes):
        super().__init__(
            message=f"Unexpected EOF, expected to read {remaining}/{expected} more bytes"
        )
        self.remaining = remaining
        self.expected = expected
        self.partial = partial


class ReadToEndError(_ComposedError):
    """Error raised by the read-to-end coroutine."""


class WriteAllError(_ComposedError):
    """Error raised by the write-all coroutine."""


class WriteZeroError(WriteAllError):
    """The stream accepted zero bytes before the whole payload was written."""

    def __init__(self, remaining: int, total: int, written: int):
        super().__init__(
            message=f"Write zero, {remaining}/{total} bytes could not be written"
        )
        self.remaining = remaining
        self.total = total
        self.written = written
