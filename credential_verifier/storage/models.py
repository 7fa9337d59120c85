from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class DocumentKind(str, Enum):
    IMAGE = "image"
    PDF = "pdf"


@dataclass(frozen=True)
class DocumentHandle:
    """Reference to a document's bytes on disk plus its inferred kind."""

    path: Path
    kind: DocumentKind
    mime_type: str

    def read_bytes(self) -> bytes:
        return self.path.read_bytes()
