import pymupdf

from credential_verifier.pdf.base import BaseTextLayerExtractor
from credential_verifier.pdf.exceptions import PdfExtractionError


class PyMuPdfAdapter(BaseTextLayerExtractor):
    """Reads the PDF text layer with PyMuPDF in reading order.

    ``sort=True`` orders blocks top-to-bottom, left-to-right, so the lines
    come out in the same order pdfplumber and OCR produce them.
    """

    def extract(self, pdf_bytes: bytes) -> str:
        pages: list[str] = []
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                for page in doc:
                    text = page.get_text("text", sort=True).strip()
                    if text:
                        pages.append(text)
        except Exception as exc:
            raise PdfExtractionError(f"pymupdf could not read text layer: {exc}") from exc
        return "\n".join(pages)
