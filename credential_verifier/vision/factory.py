from typing import ClassVar

from credential_verifier.classification.classifier import CredentialClassifier
from credential_verifier.config.settings import Settings
from credential_verifier.logging.logger import Log
from credential_verifier.pdf.rasterizer import PdfRasterizer
from credential_verifier.vision.analyzer import VisionAnalyzer
from credential_verifier.vision.client_base import BaseVisionClient
from credential_verifier.vision.example_client_adapter import ExampleVisionClientAdapter
from credential_verifier.vision.image_encoder import DocumentImageEncoder
from credential_verifier.vision.openai_client_adapter import OpenAIVisionClientAdapter


class VisionAnalyzerFactory:
    """Creates the configured vision analyzer, or None when the AI path is off."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "gemini": "https://generativelanguage.googleapis.com/v1beta/openai/",
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "ollama": "http://localhost:11434/v1",
    }
    KEYLESS_PROVIDERS: ClassVar[frozenset[str]] = frozenset({"ollama"})

    @classmethod
    def create(
        cls,
        settings: Settings,
        *,
        rasterizer: PdfRasterizer,
        classifier: CredentialClassifier,
    ) -> VisionAnalyzer | None:
        provider = settings.vision_provider.strip().lower()
        if provider == "disabled":
            Log.info("AI vision analysis disabled by configuration")
            return None

        client: BaseVisionClient
        if provider == "example":
            client = ExampleVisionClientAdapter()
            model = "example"
        else:
            base_url = cls._resolve_base_url(provider, settings)
            api_key = settings.vision_api_key.strip()
            if not api_key and provider not in cls.KEYLESS_PROVIDERS:
                Log.warning(f"No API key configured for vision provider '{provider}'; AI path off")
                return None
            client = OpenAIVisionClientAdapter(
                api_key=api_key or provider,
                timeout_seconds=settings.vision_timeout_seconds,
                base_url=base_url,
            )
            model = settings.vision_model_name

        return VisionAnalyzer(
            client=client,
            model=model,
            encoder=DocumentImageEncoder(rasterizer),
            classifier=classifier,
            temperature=settings.vision_temperature,
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        if provider == "openai":
            return None
        if provider == "openai_compatible":
            url = settings.vision_base_url.strip()
            if not url:
                raise ValueError(
                    "vision_base_url is required for vision_provider=openai_compatible"
                )
            return url
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return settings.vision_base_url.strip() or default_base_url
        supported = [
            "disabled",
            "example",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ValueError(f"Unknown vision provider '{provider}'. Choose from: {supported}")
