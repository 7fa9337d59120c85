class PdfError(Exception):
    """Base exception for PDF handling."""


class PdfExtractionError(PdfError):
    """Raised when the embedded text layer cannot be read."""


class PdfRenderError(PdfError):
    """Raised when a PDF page cannot be rasterized."""
