import pytest

from upload_api.content_types import (
    OCTET_STREAM,
    SUPPORTED_TYPES,
    TEXT_PLAIN,
    detect_content_type,
    is_allowed,
    resolve_extension,
)
from upload_api.errors import ExtensionLookupError
from tests.consts import (
    TEST_GIF_CONTENT,
    TEST_JPEG_CONTENT,
    TEST_PDF_CONTENT,
    TEST_PNG_CONTENT,
    TEST_TEXT_CONTENT,
)


@pytest.mark.parametrize(
    "content, expected",
    [
        (TEST_JPEG_CONTENT, "image/jpeg"),
        (TEST_PNG_CONTENT, "image/png"),
        (TEST_GIF_CONTENT, "image/gif"),
        (b"GIF87a" + b"\x00" * 10, "image/gif"),
        (TEST_PDF_CONTENT, "application/pdf"),
        (b"BM" + b"\x00" * 20, "image/bmp"),
        (b"PK\x03\x04" + b"\x00" * 20, "application/zip"),
        (b"RIFF\x24\x00\x00\x00WEBPVP8 ", "image/webp"),
        (TEST_TEXT_CONTENT, TEXT_PLAIN),
        (b"", TEXT_PLAIN),
        (b"\x01\x02\x03binary", OCTET_STREAM),
    ],
)
def test_detect_content_type(content: bytes, expected: str):
    assert detect_content_type(content) == expected


def test_detect_only_inspects_leading_bytes():
    content = b"a" * 512 + b"%PDF-"
    assert detect_content_type(content) == TEXT_PLAIN


def test_allow_list():
    allowed = {row.mime_type for row in SUPPORTED_TYPES if row.allowed}
    assert allowed == {"image/jpeg", "image/jpg", "image/gif", "image/png", "application/pdf"}

    for mime_type in allowed:
        assert is_allowed(mime_type)
    for mime_type in ["image/bmp", "image/webp", TEXT_PLAIN, OCTET_STREAM, "application/zip"]:
        assert not is_allowed(mime_type)


def test_resolve_extension_from_table():
    assert resolve_extension("image/png") == ".png"
    assert resolve_extension("image/jpeg") == ".jpg"
    assert resolve_extension("image/jpg") == ".jpg"
    assert resolve_extension("image/gif") == ".gif"
    assert resolve_extension("application/pdf") == ".pdf"


def test_resolve_extension_falls_back_to_mimetypes():
    assert resolve_extension(TEXT_PLAIN) == ".txt"


def test_resolve_extension_unknown_type():
    with pytest.raises(ExtensionLookupError):
        resolve_extension("application/x-not-a-real-type")
