from dataclasses import dataclass
from enum import Enum


class CredentialType(str, Enum):
    """Closed set of canonical credential categories, in priority order."""

    CERTIFICATE_OF_GRADUATION = "Certificate of Graduation"
    TRANSCRIPT = "Transcript"
    PHD_DEGREE = "PhD Degree"
    MASTER_DEGREE = "Master Degree"
    BACHELOR_DEGREE = "Bachelor Degree"
    DIPLOMA = "Diploma"
    CERTIFICATE = "Certificate"
    ACHIEVEMENT_AWARD = "Achievement Award"
    LETTER_OF_RECOMMENDATION = "Letter of Recommendation"


class Confidence(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"

    @classmethod
    def parse(cls, value: object) -> "Confidence | None":
        if not isinstance(value, str):
            return None
        lowered = value.strip().lower()
        for member in cls:
            if member.value.lower() == lowered:
                return member
        return None


@dataclass(frozen=True)
class CredentialClassification:
    """Category assigned to one document.

    ``canonical_type`` is None when nothing cleared the match bar.
    """

    canonical_type: CredentialType | None = None
    raw_label: str | None = None
    confidence: Confidence | None = None
    matched_pattern: str | None = None

    @property
    def label(self) -> str:
        return self.canonical_type.value if self.canonical_type else "Unknown"
