"""AI-assisted visual analysis of credential documents."""

from pathlib import Path
from typing import Any

from credential_verifier.classification.classifier import CredentialClassifier
from credential_verifier.logging.logger import Log
from credential_verifier.storage.models import DocumentHandle
from credential_verifier.vision import prompt_loader
from credential_verifier.vision.client_base import BaseVisionClient
from credential_verifier.vision.image_encoder import DocumentImageEncoder
from credential_verifier.vision.models import (
    AuthenticityMarkers,
    DocumentAnalysis,
    ImagePart,
    VisualComparison,
)
from credential_verifier.vision.response_parser import extract_json_object
from credential_verifier.vision.validator import (
    build_authenticity_markers,
    build_document_analysis,
    build_visual_comparison,
)


class VisionAnalyzer:
    """Three independent calls to a vision-capable model.

    Every call either returns a validated result or raises a subclass of
    ``AIServiceError``; callers never see a half-parsed reply.
    """

    def __init__(
        self,
        *,
        client: BaseVisionClient,
        model: str,
        encoder: DocumentImageEncoder,
        classifier: CredentialClassifier,
        temperature: float = 0.4,
        prompt_dir: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._encoder = encoder
        self._classifier = classifier
        self._temperature = max(0.0, min(1.0, temperature))
        self._system_prompt = prompt_loader.load_prompt(prompt_loader.SYSTEM, prompt_dir)
        self._classify_prompt = prompt_loader.load_prompt(
            prompt_loader.CLASSIFY_DOCUMENT, prompt_dir
        )
        self._compare_prompt = prompt_loader.load_prompt(
            prompt_loader.COMPARE_DOCUMENTS, prompt_dir
        )
        self._markers_prompt = prompt_loader.load_prompt(
            prompt_loader.AUTHENTICITY_MARKERS, prompt_dir
        )

    def classify_document(self, document: DocumentHandle) -> DocumentAnalysis:
        data = self._ask(self._classify_prompt, [self._encoder.encode(document)])
        label = data.get("documentType")
        analysis = build_document_analysis(
            data,
            canonical_type=self._classifier.normalize(label if isinstance(label, str) else None),
        )
        Log.info(
            f"AI classified {document.path.name} as {analysis.document_type}",
            confidence=analysis.confidence.value if analysis.confidence else None,
        )
        return analysis

    def compare_visually(
        self,
        reference: DocumentHandle,
        candidate: DocumentHandle,
    ) -> VisualComparison:
        images = [self._encoder.encode(reference), self._encoder.encode(candidate)]
        comparison = build_visual_comparison(self._ask(self._compare_prompt, images))
        Log.info(
            "AI visual comparison completed",
            same_type=comparison.same_credential_type,
            exact=comparison.exact_same_document,
            severity=comparison.tampering_severity.value,
        )
        return comparison

    def detect_authenticity_markers(self, document: DocumentHandle) -> AuthenticityMarkers:
        markers = build_authenticity_markers(
            self._ask(self._markers_prompt, [self._encoder.encode(document)])
        )
        Log.info(
            f"AI authenticity markers for {document.path.name}",
            score=markers.overall_authenticity_score,
        )
        return markers

    def _ask(self, prompt: str, images: list[ImagePart]) -> dict[str, Any]:
        raw = self._client.create_completion(
            model=self._model,
            temperature=self._temperature,
            system_prompt=self._system_prompt,
            user_prompt=prompt,
            images=images,
        )
        Log.debug(f"AI raw response:\n{raw}")
        return extract_json_object(raw)
