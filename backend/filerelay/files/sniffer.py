"""Content-type sniffing for stored files.

The classification looks at the first bytes only and never consumes the
stream: the caller's read position is restored before returning.
"""
import logging
from typing import BinaryIO

import filetype

logger = logging.getLogger(__name__)

SNIFF_LEN = 512

TEXT_PLAIN = "text/plain; charset=utf-8"
OCTET_STREAM = "application/octet-stream"

_WHITESPACE = b"\t\n\x0c\r "

# Matched case-insensitively after leading whitespace and must be followed by
# a space or ">".
_HTML_TAGS = (
    b"<!DOCTYPE HTML", b"<HTML", b"<HEAD", b"<SCRIPT", b"<IFRAME", b"<H1",
    b"<DIV", b"<FONT", b"<TABLE", b"<A", b"<STYLE", b"<TITLE", b"<B",
    b"<BODY", b"<BR", b"<P",
)

_PREFIXES = (
    (b"%PDF-", "application/pdf"),
    (b"%!PS-Adobe-", "application/postscript"),
    (b"\xfe\xff", "text/plain; charset=utf-16be"),
    (b"\xff\xfe", "text/plain; charset=utf-16le"),
    (b"\xef\xbb\xbf", TEXT_PLAIN),
)

# Control bytes that never show up in text.
_BINARY_BYTES = frozenset(
    list(range(0x00, 0x09)) + [0x0B] + list(range(0x0E, 0x1B)) + list(range(0x1C, 0x20))
)


def _is_html(sample: bytes) -> bool:
    upper = sample.upper()
    if upper.startswith(b"<!--"):
        return True
    for tag in _HTML_TAGS:
        if upper.startswith(tag) and upper[len(tag):len(tag) + 1] in (b" ", b">"):
            return True
    return False


def detect_content_type(sample: bytes) -> str:
    """Classify a content sample into a MIME type string.

    Always returns a valid type; unrecognised binary data falls back to
    ``application/octet-stream``.
    """
    if not sample:
        return TEXT_PLAIN

    stripped = sample.lstrip(_WHITESPACE)
    if _is_html(stripped):
        return "text/html; charset=utf-8"
    if stripped.startswith(b"<?xml"):
        return "text/xml; charset=utf-8"

    for prefix, mime in _PREFIXES:
        if sample.startswith(prefix):
            return mime

    kind = filetype.guess(sample)
    if kind is not None and kind.mime:
        return kind.mime

    if not any(byte in _BINARY_BYTES for byte in sample):
        return TEXT_PLAIN
    return OCTET_STREAM


def sniff_content_type(source: BinaryIO, sample_size: int = SNIFF_LEN) -> str:
    """Classify *source* from its current position without moving it.

    Reads at most ``sample_size`` bytes; a shorter read at end of stream is
    classified as-is. Any ``OSError`` from tell/read/seek propagates and the
    source should then be treated as unusable.
    """
    offset = source.tell()
    try:
        sample = source.read(sample_size)
    finally:
        source.seek(offset)

    content_type = detect_content_type(sample or b"")
    logger.debug("Sniffed %d bytes at offset %d as %s", len(sample or b""), offset, content_type)
    return content_type
