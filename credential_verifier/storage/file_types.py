"""File kind detection from extensions, Content-Type headers and magic bytes.

Neither the extension nor the header is trusted alone: a PDF signature in
the first bytes always wins.
"""

from pathlib import Path

from credential_verifier.storage.models import DocumentHandle, DocumentKind

PDF_SIGNATURE = b"%PDF"

_MAGIC_EXTENSIONS: list[tuple[bytes, str]] = [
    (PDF_SIGNATURE, ".pdf"),
    (b"\x89PNG\r\n\x1a\n", ".png"),
    (b"\xff\xd8\xff", ".jpg"),
    (b"GIF87a", ".gif"),
    (b"GIF89a", ".gif"),
    (b"BM", ".bmp"),
    (b"II*\x00", ".tiff"),
    (b"MM\x00*", ".tiff"),
]

# Order matters: "image/jpg" and "image/jpeg" both map to .jpg.
_CONTENT_TYPE_EXTENSIONS: list[tuple[str, str]] = [
    ("pdf", ".pdf"),
    ("image/jpeg", ".jpg"),
    ("image/jpg", ".jpg"),
    ("image/png", ".png"),
    ("image/gif", ".gif"),
    ("image/bmp", ".bmp"),
    ("image/tiff", ".tiff"),
]

MIME_TYPES: dict[str, str] = {
    ".pdf": "application/pdf",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".bmp": "image/bmp",
    ".tif": "image/tiff",
    ".tiff": "image/tiff",
}

UNKNOWN_EXTENSION = ".tmp"


def extension_from_magic(data: bytes) -> str | None:
    for signature, extension in _MAGIC_EXTENSIONS:
        if data.startswith(signature):
            return extension
    return None


def extension_from_content_type(content_type: str | None) -> str | None:
    if not content_type:
        return None
    lowered = content_type.lower()
    for marker, extension in _CONTENT_TYPE_EXTENSIONS:
        if marker in lowered:
            return extension
    return None


def sniff_extension(data: bytes, content_type: str | None = None) -> str:
    """Pick a file extension for downloaded bytes.

    The header gives the first guess; recognised magic bytes override it.
    """
    extension = extension_from_content_type(content_type) or UNKNOWN_EXTENSION
    return extension_from_magic(data) or extension


def detect_kind(path: Path, head: bytes | None = None) -> DocumentKind:
    """PDF when the extension says so or the file starts with %PDF, else image."""
    if path.suffix.lower() == ".pdf":
        return DocumentKind.PDF
    if head is None:
        with path.open("rb") as fh:
            head = fh.read(len(PDF_SIGNATURE))
    if head.startswith(PDF_SIGNATURE):
        return DocumentKind.PDF
    return DocumentKind.IMAGE


def mime_type_for(path: Path, kind: DocumentKind) -> str:
    if kind is DocumentKind.PDF:
        return MIME_TYPES[".pdf"]
    return MIME_TYPES.get(path.suffix.lower(), "image/jpeg")


def open_document(path: Path) -> DocumentHandle:
    """Build a DocumentHandle for a file already on disk.

    Raises:
        FileNotFoundError: if *path* does not exist.
    """
    if not path.is_file():
        raise FileNotFoundError(f"File not found: {path}")
    kind = detect_kind(path)
    return DocumentHandle(path=path, kind=kind, mime_type=mime_type_for(path, kind))
