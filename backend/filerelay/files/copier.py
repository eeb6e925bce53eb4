"""Chunked byte relay between file-like objects.

Peak memory is the size of one buffer, whatever the payload size.
"""
from typing import BinaryIO, Iterator, Optional

DEFAULT_CHUNK_SIZE = 32_000


def read_chunks(source: BinaryIO, buf: bytearray) -> Iterator[memoryview]:
    """Yield successive fills of *buf* until *source* is exhausted.

    Each yielded view aliases *buf* and is only valid until the next
    iteration.
    """
    if not buf:
        raise ValueError("empty buffer in read_chunks")
    view = memoryview(buf)
    readinto = getattr(source, "readinto", None)
    while True:
        if readinto is not None:
            n = readinto(view)
        else:
            data = source.read(len(buf))
            n = len(data) if data else 0
            view[:n] = data or b""
        if not n:
            return
        yield view[:n]


def copy_buffer(source: BinaryIO, sink: BinaryIO, buf: Optional[bytearray] = None) -> int:
    """Copy everything left in *source* to *sink* through *buf*.

    Returns the number of bytes written. A read or write error aborts the
    copy; whatever reached *sink* before the error stays there.
    """
    if buf is None:
        buf = bytearray(DEFAULT_CHUNK_SIZE)

    written = 0
    for chunk in read_chunks(source, buf):
        n = sink.write(chunk)
        if n is not None and n != len(chunk):
            raise OSError(f"short write: {n} of {len(chunk)} bytes")
        written += len(chunk)
    return written
