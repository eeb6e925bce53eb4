"""File transfer module for filerelay.

Uploads are written to a flat directory under the client-supplied name and
streamed back with a sniffed content type. Both directions move bytes through
a fixed-size buffer, so memory use does not grow with file size.
"""

from .copier import DEFAULT_CHUNK_SIZE, copy_buffer, read_chunks
from .schemas import Download, StoredFile
from .service import FileStore, StoreEntryNotFound
from .sniffer import detect_content_type, sniff_content_type

__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "Download",
    "FileStore",
    "StoreEntryNotFound",
    "StoredFile",
    "copy_buffer",
    "detect_content_type",
    "read_chunks",
    "sniff_content_type",
]
