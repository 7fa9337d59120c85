import httpx
import openai

from credential_verifier.vision.client_base import BaseVisionClient
from credential_verifier.vision.exceptions import (
    InvalidCredentialsError,
    MalformedResponseError,
    QuotaExhaustedError,
    ServiceUnavailableError,
)
from credential_verifier.vision.models import ImagePart


class OpenAIVisionClientAdapter(BaseVisionClient):
    """Vision client built on the OpenAI-compatible chat completions API.

    Retries are disabled: a failed call downgrades the verification to
    OCR-only mode instead of stalling it.
    """

    MAX_OUTPUT_TOKENS = 2048

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
            max_retries=0,
        )

    def create_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        images: list[ImagePart],
    ) -> str:
        content: list[dict[str, object]] = [{"type": "text", "text": user_prompt}]
        content.extend(
            {"type": "image_url", "image_url": {"url": image.to_data_url()}}
            for image in images
        )
        messages: list[dict[str, object]] = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": content})

        try:
            response = self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                max_tokens=self.MAX_OUTPUT_TOKENS,
                messages=messages,  # type: ignore[arg-type]
            )
        except openai.RateLimitError as exc:
            raise QuotaExhaustedError(f"AI provider quota exhausted: {exc}") from exc
        except (openai.AuthenticationError, openai.PermissionDeniedError) as exc:
            raise InvalidCredentialsError(f"AI provider rejected credentials: {exc}") from exc
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise ServiceUnavailableError(f"AI provider network error: {exc}") from exc
        except openai.APIStatusError as exc:
            # Gemini answers an invalid key with 400 rather than 401
            if "api key" in str(exc).lower():
                raise InvalidCredentialsError(
                    f"AI provider rejected credentials: {exc}"
                ) from exc
            raise ServiceUnavailableError(f"AI provider API error: {exc}") from exc
        except openai.APIError as exc:
            raise ServiceUnavailableError(f"AI provider API error: {exc}") from exc

        if not response.choices:
            raise MalformedResponseError("AI returned no choices")
        text = response.choices[0].message.content
        if not text:
            raise MalformedResponseError("AI returned empty response")
        return text
