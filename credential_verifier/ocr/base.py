from abc import ABC, abstractmethod
from pathlib import Path


class BaseOcrEngine(ABC):
    """Contract for OCR engine adapters."""

    @abstractmethod
    def recognize(self, image_path: Path) -> str:
        """Return the raw text recognized in the image at *image_path*.

        Raises:
            OcrError: if the engine cannot read the image or fails.
        """
