from abc import ABC, abstractmethod


class BaseTextLayerExtractor(ABC):
    """Contract for adapters reading the embedded text layer of a PDF."""

    @abstractmethod
    def extract(self, pdf_bytes: bytes) -> str:
        """Return the text of every page that has any, joined by newlines.

        Scanned PDFs without a text layer yield an empty or near-empty string.

        Raises:
            PdfExtractionError: if the bytes cannot be parsed as a PDF.
        """

    def usable_text_layer(self, pdf_bytes: bytes, min_chars: int) -> str | None:
        """Text layer if it holds at least *min_chars* characters, else None.

        None means the PDF should be treated as a scan and OCR'd.

        Raises:
            PdfExtractionError: if the bytes cannot be parsed as a PDF.
        """
        text = self.extract(pdf_bytes)
        if len(text.strip()) < min_chars:
            return None
        return text
