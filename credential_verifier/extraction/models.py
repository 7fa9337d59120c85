from dataclasses import dataclass
from enum import Enum


class ExtractionMethod(str, Enum):
    TEXT_LAYER = "text_layer"
    OCR = "ocr"


@dataclass(frozen=True)
class ExtractedContent:
    """Text produced once per document per verification run."""

    raw_text: str
    cleaned_text: str
    source_length: int
    method: ExtractionMethod = ExtractionMethod.OCR

    @property
    def cleaned_length(self) -> int:
        return len(self.cleaned_text.strip())
