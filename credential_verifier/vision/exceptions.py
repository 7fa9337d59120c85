class VisionError(Exception):
    """Base exception for the vision analysis package."""


class PromptLoadError(VisionError):
    """Raised when a bundled prompt template cannot be read."""


class AIServiceError(VisionError):
    """The AI path is unavailable for this call; use the deterministic fallback."""


class QuotaExhaustedError(AIServiceError):
    """The provider refused the call because a usage quota or rate limit was hit."""


class InvalidCredentialsError(AIServiceError):
    """The provider rejected the API key (configuration error)."""


class ServiceUnavailableError(AIServiceError):
    """Network failure, timeout or provider-side error; a later call may succeed."""


class MalformedResponseError(AIServiceError):
    """The reply held no usable JSON object or failed shape validation."""


class DocumentEncodingError(AIServiceError):
    """A document could not be converted into an image for the provider."""
