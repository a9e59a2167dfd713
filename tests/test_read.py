"""Tests for the read coroutine."""

import io

import pytest

from streamcoro.coroutines import Read
from streamcoro.core.model import (
    Eof, Err, InvalidArgumentError, Io, IoKind, Ok, StreamIo, StreamOutput,
)

from helpers import read_response, run


class TestRead:
    """Test the primitive read coroutine."""

    def test_read_until_eof(self):
        """Consecutive reads reuse the buffer and end with EOF."""
        reader = io.BytesIO(b"abcdef")
        read = Read.with_capacity(4)

        result, _ = run(read, reader)
        assert isinstance(result, Ok)
        assert result.value.bytes() == b"abcd"
        read.replace(result.value.buffer)

        result, _ = run(read, reader)
        assert isinstance(result, Ok)
        assert result.value.bytes() == b"ef"
        read.replace(result.value.buffer)

        result, _ = run(read, reader)
        assert isinstance(result, Eof)

    def test_first_resume_emits_read_request(self):
        """Resuming without argument lends the whole buffer to the runtime."""
        read = Read(16)
        result = read.resume()

        assert isinstance(result, Io)
        assert result.io.kind is IoKind.READ
        assert result.io.is_request
        assert result.io.buffer == bytearray(16)

    def test_buffer_handed_back_is_the_same_object(self):
        """The response carries the very buffer the request lent out."""
        read = Read(8)
        request = read.resume().io
        response = read_response(io.BytesIO(b"xyz"), request)

        result = read.resume(response)
        assert isinstance(result, Ok)
        assert result.value.buffer is request.buffer
        assert result.value.bytes() == b"xyz"

    def test_eof_is_idempotent(self):
        """Once EOF is reached, further reads on an exhausted source report EOF again."""
        reader = io.BytesIO(b"")
        read = Read(4)

        for _ in range(3):
            result, requests = run(read, reader)
            assert isinstance(result, Eof)
            assert requests == 1

    def test_resume_without_replace_allocates_fresh_buffer(self):
        """A machine left without buffer lends a new zeroed one of configured size."""
        reader = io.BytesIO(b"abcdef")
        read = Read(3)

        first, _ = run(read, reader)
        assert first.value.bytes() == b"abc"

        request = read.resume().io
        assert request.buffer is not first.value.buffer
        assert request.buffer == bytearray(3)

    def test_pending_request_is_reemitted_unchanged(self):
        """Feeding back a pending request re-emits the identical request."""
        read = Read(4)
        request = read.resume().io

        for _ in range(2):
            result = read.resume(request)
            assert isinstance(result, Io)
            assert result.io is request

        result = read.resume(read_response(io.BytesIO(b"ab"), request))
        assert result.value.bytes() == b"ab"

    def test_write_response_is_invalid_argument(self):
        """A write-shaped response is protocol misuse, never a success."""
        read = Read(4)
        read.resume()

        arg = StreamIo.write_response(StreamOutput(b"abcd", 4))
        result = read.resume(arg)

        assert isinstance(result, Err)
        assert isinstance(result.error, InvalidArgumentError)
        assert result.error.got is arg
        assert "expected read output" in str(result.error)

    def test_write_request_is_invalid_argument(self):
        read = Read(4)
        result = read.resume(StreamIo.write_request(b"abcd"))
        assert isinstance(result.error, InvalidArgumentError)

    def test_replace_zero_fills(self):
        """A replaced buffer never leaks its previous contents."""
        read = Read(4)
        stale = bytearray(b"secret")
        read.replace(stale)

        assert read.capacity() == 6
        request = read.resume().io
        assert request.buffer is stale
        assert request.buffer == bytearray(6)

    def test_replace_with_immutable_bytes(self):
        read = Read(4)
        read.replace(b"abc")
        request = read.resume().io
        assert isinstance(request.buffer, bytearray)
        assert request.buffer == bytearray(3)

    def test_truncate(self):
        """Truncating shrinks the configured capacity, never grows it."""
        read = Read(8)
        read.truncate(3)
        assert read.capacity() == 3
        read.truncate(10)
        assert read.capacity() == 3

        request = read.resume().io
        assert len(request.buffer) == 3

    def test_truncate_while_suspended(self):
        """Truncating a suspended machine applies to the next buffer it lends."""
        read = Read(8)
        read.resume()
        read.truncate(2)
        assert len(read.resume().io.buffer) == 2

    def test_default_capacity(self):
        assert Read().capacity() == Read.DEFAULT_CAPACITY == 8 * 1024

    def test_negative_capacity(self):
        with pytest.raises(ValueError, match="capacity cannot be negative"):
            Read(-1)

    def test_repr(self):
        read = Read(4)
        assert repr(read) == "<Read capacity=4 ready>"
        read.resume()
        assert repr(read) == "<Read capacity=4 suspended>"
