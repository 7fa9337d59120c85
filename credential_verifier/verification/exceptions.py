from credential_verifier.extraction.exceptions import ExtractionError
from credential_verifier.storage.exceptions import FetchError


class VerificationError(Exception):
    """Base exception for verification-run failures raised by the orchestrator."""


class InsufficientContentError(VerificationError):
    """Raised when either document yields less text than the comparison floor."""

    def __init__(self, message: str, *, reference_length: int, candidate_length: int) -> None:
        super().__init__(message)
        self.reference_length = reference_length
        self.candidate_length = candidate_length


FATAL_ERRORS: tuple[type[Exception], ...] = (
    FetchError,
    ExtractionError,
    InsufficientContentError,
)
