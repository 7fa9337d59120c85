from credential_verifier.pdf.exceptions import PdfRenderError
from credential_verifier.pdf.rasterizer import PdfRasterizer
from credential_verifier.storage.models import DocumentHandle, DocumentKind
from credential_verifier.vision.exceptions import DocumentEncodingError
from credential_verifier.vision.models import ImagePart


class DocumentImageEncoder:
    """Turns a document into an image the vision provider accepts.

    Images pass through untouched; PDFs are rasterized (page 1) in memory.
    """

    def __init__(self, rasterizer: PdfRasterizer) -> None:
        self._rasterizer = rasterizer

    def encode(self, document: DocumentHandle) -> ImagePart:
        try:
            data = document.read_bytes()
        except OSError as exc:
            raise DocumentEncodingError(f"Cannot read {document.path.name}: {exc}") from exc
        if document.kind is DocumentKind.IMAGE:
            return ImagePart(data=data, mime_type=document.mime_type)
        try:
            return ImagePart(data=self._rasterizer.render_first_page(data), mime_type="image/png")
        except PdfRenderError as exc:
            raise DocumentEncodingError(str(exc)) from exc
