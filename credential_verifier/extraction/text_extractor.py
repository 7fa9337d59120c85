from pathlib import Path

from credential_verifier.extraction.exceptions import ExtractionError
from credential_verifier.extraction.models import ExtractedContent, ExtractionMethod
from credential_verifier.extraction.text_cleaner import clean_ocr_text
from credential_verifier.logging.logger import Log
from credential_verifier.ocr.base import BaseOcrEngine
from credential_verifier.ocr.exceptions import OcrError
from credential_verifier.pdf.base import BaseTextLayerExtractor
from credential_verifier.pdf.exceptions import PdfExtractionError, PdfRenderError
from credential_verifier.pdf.rasterizer import PdfRasterizer
from credential_verifier.storage.models import DocumentHandle, DocumentKind
from credential_verifier.storage.temp_files import scoped_temp_path


class TextExtractor:
    """Converts an image or PDF document into plain text.

    PDFs with a usable text layer skip OCR entirely and are returned
    unchanged. Scanned PDFs have page 1 rasterized to a temp PNG, which is
    deleted whether or not OCR succeeds. Images go straight to OCR.
    """

    def __init__(
        self,
        *,
        text_layer_extractor: BaseTextLayerExtractor,
        ocr_engine: BaseOcrEngine,
        rasterizer: PdfRasterizer,
        temp_dir: Path,
        min_text_layer_chars: int = 100,
    ) -> None:
        self._text_layer_extractor = text_layer_extractor
        self._ocr_engine = ocr_engine
        self._rasterizer = rasterizer
        self._temp_dir = temp_dir
        self._min_text_layer_chars = min_text_layer_chars

    def extract(self, document: DocumentHandle) -> ExtractedContent:
        """Extract text from *document*.

        Raises:
            ExtractionError: if rasterization or OCR fails.
        """
        if document.kind is DocumentKind.PDF:
            pdf_bytes = document.read_bytes()
            text_layer = self._read_text_layer(pdf_bytes, document)
            if text_layer is not None:
                Log.info(
                    f"Using PDF text layer for {document.path.name}",
                    chars=len(text_layer),
                )
                return ExtractedContent(
                    raw_text=text_layer,
                    cleaned_text=text_layer,
                    source_length=len(text_layer.strip()),
                    method=ExtractionMethod.TEXT_LAYER,
                )
            Log.info(f"PDF {document.path.name} looks scanned, rasterizing page 1 for OCR")
            raw_text = self._ocr_pdf(pdf_bytes, document)
        else:
            raw_text = self._recognize(document.path)

        cleaned = clean_ocr_text(raw_text)
        Log.info(
            f"OCR extracted text from {document.path.name}",
            raw_chars=len(raw_text),
            cleaned_chars=len(cleaned),
        )
        return ExtractedContent(
            raw_text=raw_text,
            cleaned_text=cleaned,
            source_length=len(raw_text.strip()),
            method=ExtractionMethod.OCR,
        )

    def _read_text_layer(self, pdf_bytes: bytes, document: DocumentHandle) -> str | None:
        try:
            return self._text_layer_extractor.usable_text_layer(
                pdf_bytes, self._min_text_layer_chars
            )
        except PdfExtractionError as exc:
            Log.warning(f"Text layer unreadable for {document.path.name}: {exc}")
            return None

    def _ocr_pdf(self, pdf_bytes: bytes, document: DocumentHandle) -> str:
        try:
            png = self._rasterizer.render_first_page(pdf_bytes)
        except PdfRenderError as exc:
            raise ExtractionError(f"Could not rasterize {document.path.name}: {exc}") from exc
        with scoped_temp_path(self._temp_dir, "raster_page1", ".png") as image_path:
            image_path.write_bytes(png)
            return self._recognize(image_path)

    def _recognize(self, image_path: Path) -> str:
        try:
            return self._ocr_engine.recognize(image_path)
        except OcrError as exc:
            raise ExtractionError(str(exc)) from exc
