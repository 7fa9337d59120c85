"""First-page rasterization for scanned PDFs (OCR input) and vision requests."""

import pymupdf

from credential_verifier.pdf.exceptions import PdfRenderError


class PdfRasterizer:
    """Renders page 1 of a PDF to PNG at a fixed zoom factor.

    Pixmaps are rendered without alpha so the page sits on a white
    background, which Tesseract reads far better than transparency.
    """

    def __init__(self, scale: float = 2.0) -> None:
        if scale < 2.0:
            raise ValueError("Rasterization scale must be >= 2.0")
        self._scale = scale

    def render_first_page(self, pdf_bytes: bytes) -> bytes:
        """Return page 1 as PNG bytes.

        Raises:
            PdfRenderError: if the PDF cannot be opened, has no pages or
                rendering fails.
        """
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                if doc.page_count == 0:
                    raise PdfRenderError("PDF has no pages")
                matrix = pymupdf.Matrix(self._scale, self._scale)
                pixmap = doc[0].get_pixmap(matrix=matrix, alpha=False)
                return pixmap.tobytes("png")
        except PdfRenderError:
            raise
        except Exception as exc:
            raise PdfRenderError(f"Failed to render PDF page 1: {exc}") from exc
