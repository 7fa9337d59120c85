import io

import pdfplumber

from credential_verifier.pdf.base import BaseTextLayerExtractor
from credential_verifier.pdf.exceptions import PdfExtractionError


class PdfPlumberAdapter(BaseTextLayerExtractor):
    """Reads the PDF text layer with pdfplumber.

    Pages without extractable text (scanned inserts, blank backs) are
    skipped so they do not count toward the text-layer length.
    """

    def extract(self, pdf_bytes: bytes) -> str:
        pages: list[str] = []
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                for page in pdf.pages:
                    text = (page.extract_text() or "").strip()
                    if text:
                        pages.append(text)
        except Exception as exc:
            raise PdfExtractionError(f"pdfplumber could not read text layer: {exc}") from exc
        return "\n".join(pages)
