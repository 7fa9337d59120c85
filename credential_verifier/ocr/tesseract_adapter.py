from pathlib import Path

import pytesseract
from PIL import Image

from credential_verifier.logging.logger import Log
from credential_verifier.ocr.base import BaseOcrEngine
from credential_verifier.ocr.exceptions import OcrError


class TesseractAdapter(BaseOcrEngine):
    """OCR through the Tesseract binary via pytesseract.

    The default config selects the LSTM engine (``--oem 1``), automatic page
    segmentation with orientation detection (``--psm 1``) and keeps
    interword spacing so table columns in transcripts stay apart.
    """

    DEFAULT_CONFIG = "--oem 1 --psm 1 -c preserve_interword_spaces=1"

    def __init__(
        self,
        *,
        language: str = "eng",
        config: str = DEFAULT_CONFIG,
        timeout_seconds: int = 0,
    ) -> None:
        self._language = language
        self._config = config
        self._timeout_seconds = timeout_seconds

    def recognize(self, image_path: Path) -> str:
        try:
            with Image.open(image_path) as img:
                img.load()
                if img.mode not in ("RGB", "L"):
                    img = img.convert("RGB")
                text = pytesseract.image_to_string(
                    img,
                    lang=self._language,
                    config=self._config,
                    timeout=self._timeout_seconds,
                )
        except (pytesseract.TesseractError, pytesseract.TesseractNotFoundError) as exc:
            raise OcrError(f"Tesseract failed on {image_path.name}: {exc}") from exc
        except RuntimeError as exc:
            # pytesseract signals its own timeout with a bare RuntimeError
            raise OcrError(f"Tesseract timed out on {image_path.name}: {exc}") from exc
        except OSError as exc:
            raise OcrError(f"Cannot open image {image_path.name}: {exc}") from exc
        Log.debug(f"OCR recognized {len(text)} chars from {image_path.name}")
        return text
