from abc import ABC, abstractmethod

from credential_verifier.vision.models import ImagePart


class BaseVisionClient(ABC):
    """Contract for provider-specific vision-capable chat clients."""

    @abstractmethod
    def create_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        images: list[ImagePart],
    ) -> str:
        """Return the provider reply as plain text.

        Raises:
            QuotaExhaustedError: quota or rate limit hit.
            InvalidCredentialsError: API key rejected.
            ServiceUnavailableError: network, timeout or provider failure.
            MalformedResponseError: reply carried no content.
        """
