from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from credential_verifier.classification.models import CredentialClassification
from credential_verifier.comparison.models import SimilarityResult
from credential_verifier.vision.exceptions import (
    AIServiceError,
    InvalidCredentialsError,
    MalformedResponseError,
    QuotaExhaustedError,
)
from credential_verifier.vision.models import (
    AuthenticityMarkers,
    DocumentAnalysis,
    VisualComparison,
)


class VerdictStatus(str, Enum):
    IDENTICAL = "identical"
    AUTHENTIC = "authentic"
    SUSPICIOUS = "suspicious"
    FRAUDULENT = "fraudulent"


class VerificationMode(str, Enum):
    AI = "ai"
    OCR_FALLBACK = "ocr-fallback"


class FallbackKind(str, Enum):
    DISABLED = "disabled"
    QUOTA_EXHAUSTED = "quota_exhausted"
    INVALID_CREDENTIALS = "invalid_credentials"
    SERVICE_UNAVAILABLE = "service_unavailable"
    MALFORMED_RESPONSE = "malformed_response"


class FailureKind(str, Enum):
    FETCH_FAILED = "fetch_failed"
    EXTRACTION_FAILED = "extraction_failed"
    INSUFFICIENT_CONTENT = "insufficient_content"


@dataclass(frozen=True)
class FallbackReason:
    """Why the AI-assisted path was abandoned for this run."""

    kind: FallbackKind
    detail: str

    @classmethod
    def from_error(cls, error: AIServiceError) -> "FallbackReason":
        if isinstance(error, QuotaExhaustedError):
            kind = FallbackKind.QUOTA_EXHAUSTED
        elif isinstance(error, InvalidCredentialsError):
            kind = FallbackKind.INVALID_CREDENTIALS
        elif isinstance(error, MalformedResponseError):
            kind = FallbackKind.MALFORMED_RESPONSE
        else:
            kind = FallbackKind.SERVICE_UNAVAILABLE
        return cls(kind=kind, detail=str(error))


@dataclass(frozen=True)
class AiAssessment:
    """Results of all AI calls; only built when every call succeeded."""

    reference_analysis: DocumentAnalysis
    candidate_analysis: DocumentAnalysis
    comparison: VisualComparison
    reference_markers: AuthenticityMarkers
    candidate_markers: AuthenticityMarkers


@dataclass(frozen=True)
class KeySections:
    header: str = ""
    body: str = ""
    footer: str = ""


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class Verdict:
    """Terminal result of a successful verification run."""

    status: VerdictStatus
    message: str
    mode: VerificationMode
    similarity: SimilarityResult
    reference_classification: CredentialClassification
    candidate_classification: CredentialClassification
    credential_type_match: bool
    visual_comparison: VisualComparison | None = None
    reference_analysis: DocumentAnalysis | None = None
    candidate_analysis: DocumentAnalysis | None = None
    reference_markers: AuthenticityMarkers | None = None
    candidate_markers: AuthenticityMarkers | None = None
    fallback_reason: FallbackReason | None = None
    advisory: str | None = None
    type_warning: str | None = None
    reference_sections: KeySections = field(default_factory=KeySections)
    candidate_sections: KeySections = field(default_factory=KeySections)
    reference_text: str = ""
    candidate_text: str = ""
    timestamp: str = field(default_factory=_utc_now)
    success: bool = True


@dataclass(frozen=True)
class VerificationFailure:
    """Structured fatal outcome: the documents could not be compared."""

    error: FailureKind
    message: str
    detail: str = ""
    reference_text_length: int | None = None
    candidate_text_length: int | None = None
    timestamp: str = field(default_factory=_utc_now)
    success: bool = False


VerificationOutcome = Verdict | VerificationFailure
