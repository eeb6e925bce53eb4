"""Schemas for file transfer.

- StoredFile: an entry in the flat store after a successful upload
- Download: an opened entry, sniffed and sized, ready to stream

Entries are keyed by the client-supplied filename with no sanitization, so
the same name always maps to the same file (last write wins).
"""
import logging
from dataclasses import dataclass, field
from typing import BinaryIO, Dict, Iterator

from pydantic import BaseModel, Field

from .copier import DEFAULT_CHUNK_SIZE, read_chunks

logger = logging.getLogger(__name__)

# Name of the multipart field carrying the upload.
UPLOAD_FIELD = "afile"


class StoredFile(BaseModel):
    """A store entry written by an upload."""
    name: str = Field(..., description="Client-supplied filename")
    size_bytes: int = Field(..., description="Bytes written")


@dataclass
class Download:
    """An open store entry plus the metadata reported in response headers.

    The handle is owned by this object. ``iter_bytes`` closes it when the
    body is exhausted or the iterator is closed early.
    """
    name: str
    handle: BinaryIO
    media_type: str
    size_bytes: int
    chunk_size: int = DEFAULT_CHUNK_SIZE
    _closed: bool = field(default=False, repr=False)

    def headers(self) -> Dict[str, str]:
        # Type and filename share one header value. Names go out as raw
        # UTF-8 bytes; header values are latin-1 on the wire.
        content_type = f"{self.media_type};{self.name}"
        return {
            "Content-Type": content_type.encode("utf-8").decode("latin-1"),
            "Content-Length": str(self.size_bytes),
        }

    def iter_bytes(self) -> Iterator[bytes]:
        buf = bytearray(self.chunk_size)
        try:
            for chunk in read_chunks(self.handle, buf):
                yield bytes(chunk)
        finally:
            self.close()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self.handle.close()
        except OSError as e:
            # The status line is already on the wire by now.
            logger.error(f"Failed to close {self.name} after download: {e}")
