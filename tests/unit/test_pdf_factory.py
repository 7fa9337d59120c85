from unittest.mock import MagicMock

import pytest

from credential_verifier.config.settings import Settings
from credential_verifier.pdf.factory import TextLayerExtractorFactory
from credential_verifier.pdf.pdfplumber_adapter import PdfPlumberAdapter
from credential_verifier.pdf.pymupdf_adapter import PyMuPdfAdapter


def _make_settings(pdf_engine: str) -> MagicMock:
    settings = MagicMock(spec=Settings)
    settings.pdf_engine = pdf_engine
    settings.pdf_text_min_chars = 100
    return settings


class TestTextLayerExtractorFactory:
    def test_creates_pdfplumber_adapter(self) -> None:
        adapter = TextLayerExtractorFactory.create(_make_settings("pdfplumber"))
        assert isinstance(adapter, PdfPlumberAdapter)

    def test_creates_pymupdf_adapter(self) -> None:
        adapter = TextLayerExtractorFactory.create(_make_settings("pymupdf"))
        assert isinstance(adapter, PyMuPdfAdapter)

    def test_is_case_insensitive(self) -> None:
        adapter = TextLayerExtractorFactory.create(_make_settings(" PyMuPDF "))
        assert isinstance(adapter, PyMuPdfAdapter)

    def test_raises_for_unknown_engine(self) -> None:
        with pytest.raises(ValueError, match="Unknown PDF engine"):
            TextLayerExtractorFactory.create(_make_settings("poppler"))
