"""
Content-type sniffing for uploaded files.

The MIME types the service knows about live in a single table. Each row
lists the magic-number prefixes that identify the type, the extension used
for stored files, and whether uploads of that type are accepted.
"""

import mimetypes
from dataclasses import dataclass
from typing import Optional, Tuple

from upload_api.errors import ExtensionLookupError

# Only the leading bytes of a payload are inspected.
SNIFF_LENGTH = 512

TEXT_PLAIN = "text/plain; charset=utf-8"
OCTET_STREAM = "application/octet-stream"


@dataclass(frozen=True)
class SupportedType:
    """One row of the content-type table."""
    mime_type: str
    signatures: Tuple[bytes, ...]
    extension: Optional[str]
    allowed: bool


SUPPORTED_TYPES: Tuple[SupportedType, ...] = (
    SupportedType("image/jpeg", (b"\xff\xd8\xff",), ".jpg", True),
    SupportedType("image/png", (b"\x89PNG\r\n\x1a\n",), ".png", True),
    SupportedType("image/gif", (b"GIF87a", b"GIF89a"), ".gif", True),
    SupportedType("application/pdf", (b"%PDF-",), ".pdf", True),
    # Alias accepted on the allow-list; never produced by detection.
    SupportedType("image/jpg", (), ".jpg", True),
    SupportedType("image/bmp", (b"BM",), ".bmp", False),
    SupportedType("image/x-icon", (b"\x00\x00\x01\x00", b"\x00\x00\x02\x00"), ".ico", False),
    SupportedType("application/zip", (b"PK\x03\x04",), ".zip", False),
    SupportedType("application/x-gzip", (b"\x1f\x8b\x08",), ".gz", False),
)

_BY_MIME_TYPE = {row.mime_type: row for row in SUPPORTED_TYPES}


def _is_webp(head: bytes) -> bool:
    return len(head) >= 12 and head[:4] == b"RIFF" and head[8:12] == b"WEBP"


def _is_binary_byte(b: int) -> bool:
    return b <= 0x08 or b == 0x0B or 0x0E <= b <= 0x1A or 0x1C <= b <= 0x1F


def detect_content_type(data: bytes) -> str:
    """
    Determine the MIME type of ``data`` from its leading bytes.

    Args:
        data: Full or partial file content

    Returns:
        str: The matching table MIME type, ``image/webp`` for RIFF/WEBP
            containers, otherwise ``text/plain; charset=utf-8`` for text-like
            content or ``application/octet-stream``
    """
    head = data[:SNIFF_LENGTH]
    for row in SUPPORTED_TYPES:
        if any(head.startswith(signature) for signature in row.signatures):
            return row.mime_type
    if _is_webp(head):
        return "image/webp"
    if any(_is_binary_byte(b) for b in head):
        return OCTET_STREAM
    return TEXT_PLAIN


def is_allowed(mime_type: str) -> bool:
    """Return True if uploads of ``mime_type`` are accepted."""
    row = _BY_MIME_TYPE.get(mime_type)
    return row is not None and row.allowed


def resolve_extension(mime_type: str) -> str:
    """
    Return the filename extension (with leading dot) for ``mime_type``.

    The table's extension wins; other types fall back to the ``mimetypes``
    registry.

    Raises:
        ExtensionLookupError: If no extension is known
    """
    row = _BY_MIME_TYPE.get(mime_type)
    if row is not None and row.extension:
        return row.extension
    extension = mimetypes.guess_extension(mime_type.split(";")[0].strip())
    if not extension:
        raise ExtensionLookupError(f"No extension known for {mime_type}")
    return extension
