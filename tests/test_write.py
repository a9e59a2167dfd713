"""Tests for the write coroutine."""

import io

from streamcoro.coroutines import Write
from streamcoro.core.model import (
    Eof, Err, InvalidArgumentError, Io, IoKind, Ok, StreamIo, StreamOutput,
)

from helpers import TrickleStream, run


class TestWrite:
    """Test the primitive write coroutine."""

    def test_write(self):
        """The whole payload is handed out in a single request."""
        sink = io.BytesIO()
        write = Write(b"abcdef")

        result, requests = run(write, sink)

        assert isinstance(result, Ok)
        assert result.value.bytes_count == 6
        assert result.value.bytes() == b"abcdef"
        assert requests == 1
        assert sink.getvalue() == b"abcdef"

    def test_request_carries_payload(self):
        payload = bytearray(b"hello")
        result = Write(payload).resume()

        assert isinstance(result, Io)
        assert result.io.kind is IoKind.WRITE
        assert result.io.buffer is payload

    def test_partial_write_is_not_retried(self):
        """A short write is reported as-is, with the unwritten tail in the buffer."""
        sink = TrickleStream(step=2)
        result, requests = run(Write(b"abcdef"), sink)

        assert requests == 1
        assert result.value.bytes_count == 2
        assert result.value.buffer[result.value.bytes_count:] == b"cdef"
        assert bytes(sink.sink) == b"ab"

    def test_zero_bytes_written_is_eof(self):
        """A peer accepting zero bytes is a terminal condition."""
        write = Write(b"abc")
        write.resume()
        result = write.resume(StreamIo.write_response(StreamOutput(b"abc", 0)))
        assert isinstance(result, Eof)

    def test_drained_payload(self):
        """After the payload was handed out, a new request carries nothing."""
        write = Write(b"abc")
        write.resume()
        assert write.resume().io.buffer == b""

    def test_replace(self):
        write = Write(b"abc")
        write.replace(b"xyz")
        assert write.resume().io.buffer == b"xyz"

    def test_pending_request_is_reemitted_unchanged(self):
        write = Write(b"abc")
        request = write.resume().io
        result = write.resume(request)
        assert isinstance(result, Io)
        assert result.io is request

    def test_read_response_is_invalid_argument(self):
        write = Write(b"abc")
        write.resume()
        result = write.resume(StreamIo.read_response(StreamOutput(bytearray(b"abc"), 3)))

        assert isinstance(result, Err)
        assert isinstance(result.error, InvalidArgumentError)
        assert "expected write output" in str(result.error)
