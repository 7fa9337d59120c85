class ExtractionError(Exception):
    """Raised when OCR or rasterization of a document fails."""
