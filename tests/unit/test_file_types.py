from pathlib import Path

import pytest

from credential_verifier.storage.file_types import (
    detect_kind,
    extension_from_content_type,
    extension_from_magic,
    mime_type_for,
    open_document,
    sniff_extension,
)
from credential_verifier.storage.models import DocumentKind

PNG_HEAD = b"\x89PNG\r\n\x1a\n" + b"\x00" * 8
JPEG_HEAD = b"\xff\xd8\xff\xe0" + b"\x00" * 8


class TestExtensionFromMagic:
    @pytest.mark.parametrize(
        ("data", "expected"),
        [
            (b"%PDF-1.7\n", ".pdf"),
            (PNG_HEAD, ".png"),
            (JPEG_HEAD, ".jpg"),
            (b"GIF89a....", ".gif"),
            (b"BM\x00\x00", ".bmp"),
            (b"II*\x00rest", ".tiff"),
        ],
    )
    def test_known_signatures(self, data: bytes, expected: str) -> None:
        assert extension_from_magic(data) == expected

    def test_unknown_signature(self) -> None:
        assert extension_from_magic(b"hello world") is None


class TestExtensionFromContentType:
    def test_pdf(self) -> None:
        assert extension_from_content_type("application/pdf") == ".pdf"

    def test_jpeg_with_charset(self) -> None:
        assert extension_from_content_type("image/JPEG; charset=binary") == ".jpg"

    def test_missing_header(self) -> None:
        assert extension_from_content_type(None) is None


class TestSniffExtension:
    def test_magic_bytes_override_header(self) -> None:
        assert sniff_extension(b"%PDF-1.4", "image/png") == ".pdf"

    def test_header_used_when_magic_unknown(self) -> None:
        assert sniff_extension(b"????", "image/png") == ".png"

    def test_unknown_content_stored_as_tmp(self) -> None:
        assert sniff_extension(b"????", "application/octet-stream") == ".tmp"


class TestDetectKind:
    def test_pdf_by_extension(self, tmp_path: Path) -> None:
        path = tmp_path / "doc.PDF"
        path.write_bytes(b"anything")
        assert detect_kind(path) is DocumentKind.PDF

    def test_pdf_by_magic_without_extension(self, tmp_path: Path) -> None:
        path = tmp_path / "upload"
        path.write_bytes(b"%PDF-1.4 body")
        assert detect_kind(path) is DocumentKind.PDF

    def test_pdf_by_supplied_head(self, tmp_path: Path) -> None:
        assert detect_kind(tmp_path / "missing.tmp", b"%PDF") is DocumentKind.PDF

    def test_everything_else_is_image(self, tmp_path: Path) -> None:
        path = tmp_path / "scan.jpg"
        path.write_bytes(JPEG_HEAD)
        assert detect_kind(path) is DocumentKind.IMAGE


class TestMimeTypes:
    def test_pdf_kind(self, tmp_path: Path) -> None:
        assert mime_type_for(tmp_path / "x.tmp", DocumentKind.PDF) == "application/pdf"

    def test_png(self, tmp_path: Path) -> None:
        assert mime_type_for(tmp_path / "x.png", DocumentKind.IMAGE) == "image/png"

    def test_unknown_image_defaults_to_jpeg(self, tmp_path: Path) -> None:
        assert mime_type_for(tmp_path / "x.tmp", DocumentKind.IMAGE) == "image/jpeg"


class TestOpenDocument:
    def test_builds_handle(self, tmp_path: Path, png_bytes: bytes) -> None:
        path = tmp_path / "candidate.png"
        path.write_bytes(png_bytes)
        handle = open_document(path)
        assert handle.kind is DocumentKind.IMAGE
        assert handle.mime_type == "image/png"
        assert handle.read_bytes() == png_bytes

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            open_document(tmp_path / "nope.pdf")
