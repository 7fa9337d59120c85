"""Offline vision client adapter.

Returns one fixed reply that satisfies all three analysis prompts and
describes two identical, untampered documents. Useful for local
development, for tests, and as a template for new provider adapters:
implement BaseVisionClient and register the provider in
VisionAnalyzerFactory.
"""

import json
from typing import ClassVar

from credential_verifier.vision.client_base import BaseVisionClient
from credential_verifier.vision.models import ImagePart


class ExampleVisionClientAdapter(BaseVisionClient):
    DEFAULT_RESPONSE: ClassVar[dict[str, object]] = {
        "documentType": "Certificate",
        "confidence": "Medium",
        "isCredential": True,
        "visualElements": {"hasOfficialSeal": True, "hasSignature": True},
        "sameCredentialType": True,
        "exactSameDocument": True,
        "matchConfidence": "High",
        "authenticityMarkers": {
            "sealMatch": True,
            "signatureMatch": True,
            "overallAuthenticityScore": 90,
        },
        "tamperingIndicators": {"detected": False, "signs": [], "severity": "None"},
        "specificTampering": [],
        "recommendation": "Authentic",
        "officialSeal": {"present": True},
        "signatures": {"present": True},
        "stamps": {"present": False},
        "overallAuthenticityScore": 90,
        "concerns": [],
    }

    def create_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        images: list[ImagePart],
    ) -> str:
        _ = model, temperature, system_prompt, user_prompt, images
        return "Analysis complete.\n```json\n" + json.dumps(self.DEFAULT_RESPONSE) + "\n```"
