import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from credential_verifier.classification.classifier import CredentialClassifier
from credential_verifier.classification.models import Confidence, CredentialType
from credential_verifier.storage.models import DocumentHandle, DocumentKind
from credential_verifier.vision import prompt_loader
from credential_verifier.vision.analyzer import VisionAnalyzer
from credential_verifier.vision.client_base import BaseVisionClient
from credential_verifier.vision.exceptions import MalformedResponseError, QuotaExhaustedError
from credential_verifier.vision.image_encoder import DocumentImageEncoder
from credential_verifier.vision.models import ImagePart, TamperingSeverity

REFERENCE = DocumentHandle(
    path=Path("reference.pdf"), kind=DocumentKind.PDF, mime_type="application/pdf"
)
CANDIDATE = DocumentHandle(
    path=Path("candidate.jpg"), kind=DocumentKind.IMAGE, mime_type="image/jpeg"
)


def _make_analyzer(reply: str, temperature: float = 0.4) -> tuple[VisionAnalyzer, MagicMock]:
    client = MagicMock(spec=BaseVisionClient)
    client.create_completion.return_value = reply
    encoder = MagicMock(spec=DocumentImageEncoder)
    encoder.encode.side_effect = lambda doc: ImagePart(
        data=doc.path.name.encode(), mime_type="image/png"
    )
    analyzer = VisionAnalyzer(
        client=client,
        model="vision-model",
        encoder=encoder,
        classifier=CredentialClassifier(),
        temperature=temperature,
    )
    return analyzer, client


class TestClassifyDocument:
    def test_label_normalized_into_canonical_set(self) -> None:
        reply = "Sure!\n" + json.dumps(
            {"documentType": "Official Transcript of Records", "confidence": "High"}
        )
        analyzer, client = _make_analyzer(reply)

        analysis = analyzer.classify_document(REFERENCE)

        assert analysis.canonical_type is CredentialType.TRANSCRIPT
        assert analysis.confidence is Confidence.HIGH
        kwargs = client.create_completion.call_args.kwargs
        assert kwargs["model"] == "vision-model"
        assert kwargs["user_prompt"] == prompt_loader.load_prompt(prompt_loader.CLASSIFY_DOCUMENT)
        assert kwargs["system_prompt"] == prompt_loader.load_prompt(prompt_loader.SYSTEM)
        assert [part.data for part in kwargs["images"]] == [b"reference.pdf"]

    def test_unknown_label_has_no_canonical_type(self) -> None:
        analyzer, _ = _make_analyzer('{"documentType": "Other"}')
        assert analyzer.classify_document(CANDIDATE).canonical_type is None

    def test_malformed_reply(self) -> None:
        analyzer, _ = _make_analyzer("I am unable to view images.")
        with pytest.raises(MalformedResponseError):
            analyzer.classify_document(CANDIDATE)


class TestCompareVisually:
    def test_sends_both_documents_in_order(self) -> None:
        reply = json.dumps(
            {
                "sameCredentialType": True,
                "exactSameDocument": False,
                "tamperingIndicators": {"severity": "Severe"},
                "authenticityMarkers": {"overallAuthenticityScore": 20},
            }
        )
        analyzer, client = _make_analyzer(reply)

        comparison = analyzer.compare_visually(REFERENCE, CANDIDATE)

        assert comparison.tampering_severity is TamperingSeverity.SEVERE
        images = client.create_completion.call_args.kwargs["images"]
        assert [part.data for part in images] == [b"reference.pdf", b"candidate.jpg"]


class TestDetectAuthenticityMarkers:
    def test_markers(self) -> None:
        reply = json.dumps(
            {
                "officialSeal": {"present": True},
                "signatures": {"present": True},
                "stamps": {"present": False},
                "overallAuthenticityScore": 88,
            }
        )
        analyzer, _ = _make_analyzer(reply)
        markers = analyzer.detect_authenticity_markers(CANDIDATE)
        assert markers.seal_present is True
        assert markers.overall_authenticity_score == 88


class TestAnalyzerBehaviour:
    def test_temperature_clamped(self) -> None:
        analyzer, client = _make_analyzer('{"documentType": "Diploma"}', temperature=3.0)
        analyzer.classify_document(REFERENCE)
        assert client.create_completion.call_args.kwargs["temperature"] == 1.0

    def test_client_errors_propagate(self) -> None:
        analyzer, client = _make_analyzer("{}")
        client.create_completion.side_effect = QuotaExhaustedError("429")
        with pytest.raises(QuotaExhaustedError):
            analyzer.detect_authenticity_markers(REFERENCE)
