"""Tests for the chunked stream copier."""
import io

import pytest

from filerelay.files.copier import DEFAULT_CHUNK_SIZE, copy_buffer, read_chunks


class FailingSink(io.RawIOBase):
    """Sink that accepts a fixed number of writes, then errors."""

    def __init__(self, ok_writes: int):
        self.ok_writes = ok_writes
        self.received = bytearray()

    def writable(self):
        return True

    def write(self, data):
        if self.ok_writes == 0:
            raise OSError("broken pipe")
        self.ok_writes -= 1
        self.received.extend(data)
        return len(data)


class ShortSink(io.RawIOBase):
    def writable(self):
        return True

    def write(self, data):
        return len(data) - 1


class ReadOnlySource:
    """Source without readinto."""

    def __init__(self, data: bytes):
        self._stream = io.BytesIO(data)

    def read(self, size=-1):
        return self._stream.read(size)


class TestCopyBuffer:
    def test_copies_all_bytes(self):
        data = bytes(range(256)) * 500
        sink = io.BytesIO()

        assert copy_buffer(io.BytesIO(data), sink, bytearray(1000)) == len(data)
        assert sink.getvalue() == data

    def test_empty_source(self):
        sink = io.BytesIO()
        assert copy_buffer(io.BytesIO(b""), sink) == 0
        assert sink.getvalue() == b""

    def test_default_buffer(self):
        data = b"x" * (DEFAULT_CHUNK_SIZE * 2 + 5)
        sink = io.BytesIO()
        assert copy_buffer(io.BytesIO(data), sink) == len(data)
        assert sink.getvalue() == data

    def test_copies_from_remaining_position(self):
        source = io.BytesIO(b"headerbody")
        source.seek(6)
        sink = io.BytesIO()
        assert copy_buffer(source, sink) == 4
        assert sink.getvalue() == b"body"

    def test_source_without_readinto(self):
        sink = io.BytesIO()
        assert copy_buffer(ReadOnlySource(b"abcdefg"), sink, bytearray(3)) == 7
        assert sink.getvalue() == b"abcdefg"

    def test_write_error_keeps_partial_output(self):
        sink = FailingSink(ok_writes=2)
        with pytest.raises(OSError, match="broken pipe"):
            copy_buffer(io.BytesIO(b"a" * 10), sink, bytearray(4))
        assert bytes(sink.received) == b"aaaaaaaa"

    def test_short_write_is_an_error(self):
        with pytest.raises(OSError, match="short write"):
            copy_buffer(io.BytesIO(b"abc"), ShortSink(), bytearray(8))

    def test_empty_buffer_rejected(self):
        with pytest.raises(ValueError):
            copy_buffer(io.BytesIO(b"abc"), io.BytesIO(), bytearray())


class TestReadChunks:
    def test_chunks_never_exceed_buffer(self):
        chunks = [bytes(c) for c in read_chunks(io.BytesIO(b"abcdefgh"), bytearray(3))]
        assert chunks == [b"abc", b"def", b"gh"]
