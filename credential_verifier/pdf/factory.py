from credential_verifier.config.settings import Settings
from credential_verifier.logging.logger import Log
from credential_verifier.pdf.base import BaseTextLayerExtractor
from credential_verifier.pdf.pdfplumber_adapter import PdfPlumberAdapter
from credential_verifier.pdf.pymupdf_adapter import PyMuPdfAdapter


class TextLayerExtractorFactory:
    """Creates the text-layer extractor named by ``settings.pdf_engine``.

    Both engines share the same scanned-PDF rule: a text layer shorter than
    ``settings.pdf_text_min_chars`` sends the document to OCR.
    """

    ADAPTERS: dict[str, type[BaseTextLayerExtractor]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseTextLayerExtractor:
        engine = settings.pdf_engine.strip().lower()
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {sorted(cls.ADAPTERS)}"
            )
        Log.debug(
            f"Using {engine} for PDF text layers",
            min_chars=settings.pdf_text_min_chars,
        )
        return adapter_cls()
