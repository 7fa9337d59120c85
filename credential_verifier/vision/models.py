import base64
from dataclasses import dataclass, field
from enum import Enum

from credential_verifier.classification.models import Confidence, CredentialType


class TamperingSeverity(str, Enum):
    NONE = "None"
    MINOR = "Minor"
    MODERATE = "Moderate"
    SEVERE = "Severe"

    @classmethod
    def parse(cls, value: object) -> "TamperingSeverity | None":
        if not isinstance(value, str):
            return None
        lowered = value.strip().lower()
        for member in cls:
            if member.value.lower() == lowered:
                return member
        return None


@dataclass(frozen=True)
class ImagePart:
    """One image attached to a vision request."""

    data: bytes
    mime_type: str

    def to_data_url(self) -> str:
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.mime_type};base64,{encoded}"


@dataclass(frozen=True)
class DocumentAnalysis:
    document_type: str
    canonical_type: CredentialType | None = None
    confidence: Confidence | None = None
    institution_name: str | None = None
    recipient_name: str | None = None
    issue_date: str | None = None
    is_credential: bool | None = None
    visual_elements: dict[str, object] = field(default_factory=dict)
    notes: str | None = None


@dataclass(frozen=True)
class TamperingField:
    """One discrepancy between the reference and the candidate."""

    field: str
    reference_value: str
    candidate_value: str
    location: str
    method: str
    severity: TamperingSeverity


@dataclass(frozen=True)
class VisualComparison:
    same_credential_type: bool
    exact_same_document: bool
    match_confidence: Confidence | None
    tampering_severity: TamperingSeverity
    authenticity_score: int
    specific_tampering: list[TamperingField] = field(default_factory=list)
    tampering_detected: bool = False
    seal_match: bool | None = None
    signature_match: bool | None = None
    recommendation: str | None = None
    detailed_analysis: str | None = None


@dataclass(frozen=True)
class AuthenticityMarkers:
    seal_present: bool
    signature_present: bool
    stamp_present: bool
    overall_authenticity_score: int
    concerns: list[str] = field(default_factory=list)
