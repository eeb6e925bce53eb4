"""File store service for filerelay.

A flat namespace of files under one root directory:
    <root>/<client filename>
"""
import logging
import os
from contextlib import ExitStack
from pathlib import Path
from typing import BinaryIO, Optional

from ..config import get_config
from .copier import DEFAULT_CHUNK_SIZE, copy_buffer
from .schemas import Download, StoredFile
from .sniffer import SNIFF_LEN, sniff_content_type

logger = logging.getLogger(__name__)


class StoreEntryNotFound(LookupError):
    """Raised when a download names an entry that does not exist."""

    def __init__(self, name: str, reason: str = "no such file or directory"):
        self.name = name
        super().__init__(f"open {name}: {reason}")


class FileStore:
    """Service for persisting uploads and opening them for download."""

    _instance: Optional["FileStore"] = None

    def __init__(
        self,
        root: str,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        sniff_len: int = SNIFF_LEN,
    ):
        """Initialize the store and make sure its root exists."""
        self._root = Path(root)
        self._chunk_size = chunk_size
        self._sniff_len = sniff_len
        self._root.mkdir(parents=True, exist_ok=True)

    @classmethod
    def get_instance(cls, root: Optional[str] = None) -> "FileStore":
        """Get or create the singleton instance."""
        if cls._instance is None:
            storage = get_config().storage
            cls._instance = cls(
                root or storage.root,
                chunk_size=storage.chunk_size,
                sniff_len=storage.sniff_len,
            )
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Reset the singleton instance (for testing)."""
        cls._instance = None

    @property
    def root(self) -> Path:
        return self._root

    def _entry_path(self, name: str) -> Path:
        # Names are used verbatim; no traversal or collision checks.
        return self._root / name

    def save(self, name: str, source: BinaryIO) -> StoredFile:
        """Create or truncate entry *name* and copy *source* into it.

        Args:
            name: Client-supplied filename
            source: Readable upload content

        Returns:
            StoredFile with the number of bytes written

        Raises:
            OSError: If the entry cannot be created, written or closed
        """
        with open(self._entry_path(name), "wb") as out:
            written = copy_buffer(source, out, bytearray(self._chunk_size))

        logger.info(f"Saved file: {name} ({written} bytes)")
        return StoredFile(name=name, size_bytes=written)

    def open_download(self, name: str) -> Download:
        """Open entry *name*, sniff its type and read its size.

        The returned Download owns the open handle. On any failure the
        handle is closed before the error propagates.

        Raises:
            StoreEntryNotFound: If the entry does not exist
            OSError: If sniffing or the size query fails
        """
        try:
            handle = open(self._entry_path(name), "rb")
        except (FileNotFoundError, NotADirectoryError) as e:
            raise StoreEntryNotFound(name, e.strerror or str(e)) from e

        with ExitStack() as stack:
            stack.push(handle)
            media_type = sniff_content_type(handle, self._sniff_len)
            size_bytes = os.fstat(handle.fileno()).st_size
            stack.pop_all()

        return Download(
            name=name,
            handle=handle,
            media_type=media_type,
            size_bytes=size_bytes,
            chunk_size=self._chunk_size,
        )
