import asyncio
from pathlib import Path

from credential_verifier.classification.classifier import CredentialClassifier
from credential_verifier.classification.models import CredentialClassification
from credential_verifier.comparison.text_comparator import compare
from credential_verifier.config.settings import Settings
from credential_verifier.extraction.exceptions import ExtractionError
from credential_verifier.extraction.models import ExtractedContent
from credential_verifier.extraction.text_extractor import TextExtractor
from credential_verifier.logging.logger import Log
from credential_verifier.ocr.tesseract_adapter import TesseractAdapter
from credential_verifier.pdf.factory import TextLayerExtractorFactory
from credential_verifier.pdf.rasterizer import PdfRasterizer
from credential_verifier.storage.exceptions import FetchError
from credential_verifier.storage.file_types import open_document
from credential_verifier.storage.ipfs_fetcher import IpfsFetcher
from credential_verifier.storage.models import DocumentHandle
from credential_verifier.storage.temp_files import TempFileArena
from credential_verifier.verification.exceptions import (
    FATAL_ERRORS,
    InsufficientContentError,
)
from credential_verifier.verification.models import (
    AiAssessment,
    FailureKind,
    FallbackKind,
    FallbackReason,
    Verdict,
    VerificationFailure,
    VerificationMode,
    VerificationOutcome,
)
from credential_verifier.verification.sections import extract_key_sections
from credential_verifier.verification.verdict import classify_ai_verdict, classify_ocr_verdict
from credential_verifier.vision.analyzer import VisionAnalyzer
from credential_verifier.vision.exceptions import AIServiceError
from credential_verifier.vision.factory import VisionAnalyzerFactory
from credential_verifier.vision.models import DocumentAnalysis

QUOTA_ADVISORY = (
    "AI analysis quota exhausted. The comparison was completed in OCR-only mode; "
    "AI-assisted analysis will be available again once the quota resets."
)
TYPE_WARNING = (
    "Could not confidently identify the credential type of one or both documents. "
    "The comparison was completed but type-specific checks may be less accurate."
)
INSUFFICIENT_CONTENT_MESSAGE = (
    "Could not extract meaningful text from one or both documents. This usually "
    "means the file is a blurred or low-resolution scan, an image without readable "
    "text, a corrupted file, or an unsupported format. Please upload a clear copy."
)
FETCH_FAILED_MESSAGE = "Could not fetch the issued credential from the content store."
EXTRACTION_FAILED_MESSAGE = "Could not extract text from one of the documents."

TEXT_PREVIEW_CHARS = 5000


class CredentialVerifier:
    """Compares a candidate document against the issued reference.

    Pipeline: fetch -> AI attempt -> text extraction -> compare -> verdict.
    The AI attempt is all-or-nothing; on any AI failure the run continues
    in OCR-only mode. Every temp file is removed before a run returns.
    """

    def __init__(
        self,
        *,
        fetcher: IpfsFetcher,
        text_extractor: TextExtractor,
        classifier: CredentialClassifier,
        vision_analyzer: VisionAnalyzer | None,
        temp_dir: Path,
        min_text_chars: int = 20,
        low_text_warning_chars: int = 50,
    ) -> None:
        self._fetcher = fetcher
        self._text_extractor = text_extractor
        self._classifier = classifier
        self._vision_analyzer = vision_analyzer
        self._temp_dir = temp_dir
        self._min_text_chars = min_text_chars
        self._low_text_warning_chars = low_text_warning_chars

    def verify(
        self,
        content_id: str,
        candidate_path: str | Path,
        declared_type: str | None = None,
    ) -> VerificationOutcome:
        """Run a verification and return a verdict or a structured failure."""
        try:
            return self.run_comparison(content_id, candidate_path, declared_type)
        except FATAL_ERRORS as exc:
            failure = _failure_for(exc)
            Log.error(
                f"Verification failed: {exc}",
                content_id=content_id,
                error=failure.error.value,
            )
            return failure

    async def verify_async(
        self,
        content_id: str,
        candidate_path: str | Path,
        declared_type: str | None = None,
    ) -> VerificationOutcome:
        return await asyncio.to_thread(self.verify, content_id, candidate_path, declared_type)

    def run_comparison(
        self,
        content_id: str,
        candidate_path: str | Path,
        declared_type: str | None = None,
    ) -> Verdict:
        """Compare the candidate file with the reference stored under *content_id*.

        Raises:
            FetchError: if the reference cannot be downloaded.
            ExtractionError: if either document cannot be read or OCR'd.
            InsufficientContentError: if either text is below the floor.
        """
        Log.info("Starting verification", content_id=content_id)
        candidate = self._open_candidate(candidate_path)
        with TempFileArena(self._temp_dir) as arena:
            reference = self._fetcher.fetch(content_id, arena)
            outcome = self._try_ai_assisted(reference, candidate)
            if isinstance(outcome, AiAssessment):
                verdict = self._complete_ai_assisted(reference, candidate, declared_type, outcome)
            else:
                verdict = self._run_deterministic(reference, candidate, declared_type, outcome)

        Log.info(
            f"Verification verdict: {verdict.status.value}",
            content_id=content_id,
            mode=verdict.mode.value,
            similarity=verdict.similarity.final_similarity,
        )
        return verdict

    def _open_candidate(self, candidate_path: str | Path) -> DocumentHandle:
        try:
            return open_document(Path(candidate_path))
        except FileNotFoundError as exc:
            raise ExtractionError(f"Candidate file not found: {candidate_path}") from exc
        except OSError as exc:
            raise ExtractionError(f"Cannot read candidate file {candidate_path}: {exc}") from exc

    def _try_ai_assisted(
        self,
        reference: DocumentHandle,
        candidate: DocumentHandle,
    ) -> AiAssessment | FallbackReason:
        if self._vision_analyzer is None:
            return FallbackReason(FallbackKind.DISABLED, "AI vision analysis is not configured")

        analyzer = self._vision_analyzer
        try:
            assessment = AiAssessment(
                reference_analysis=analyzer.classify_document(reference),
                candidate_analysis=analyzer.classify_document(candidate),
                comparison=analyzer.compare_visually(reference, candidate),
                reference_markers=analyzer.detect_authenticity_markers(reference),
                candidate_markers=analyzer.detect_authenticity_markers(candidate),
            )
        except AIServiceError as exc:
            reason = FallbackReason.from_error(exc)
            _log_fallback(reason)
            return reason
        Log.info("AI-assisted analysis completed")
        return assessment

    def _complete_ai_assisted(
        self,
        reference: DocumentHandle,
        candidate: DocumentHandle,
        declared_type: str | None,
        assessment: AiAssessment,
    ) -> Verdict:
        reference_content, candidate_content = self._extract_pair(reference, candidate)
        similarity = compare(reference_content.cleaned_text, candidate_content.cleaned_text)

        ai_reference = self._classify_ai_analysis(assessment.reference_analysis, reference_content)
        reference_classification = self._apply_declared_type(declared_type, ai_reference)
        candidate_classification = self._classify_ai_analysis(
            assessment.candidate_analysis, candidate_content
        )

        comparison = assessment.comparison
        status, message = classify_ai_verdict(
            similarity.final_similarity,
            comparison.tampering_severity,
            comparison.exact_same_document,
        )
        return Verdict(
            status=status,
            message=message,
            mode=VerificationMode.AI,
            similarity=similarity,
            reference_classification=reference_classification,
            candidate_classification=candidate_classification,
            credential_type_match=comparison.same_credential_type,
            visual_comparison=comparison,
            reference_analysis=assessment.reference_analysis,
            candidate_analysis=assessment.candidate_analysis,
            reference_markers=assessment.reference_markers,
            candidate_markers=assessment.candidate_markers,
            type_warning=_type_warning(reference_classification, candidate_classification),
            **self._text_fields(reference_content, candidate_content),
        )

    def _run_deterministic(
        self,
        reference: DocumentHandle,
        candidate: DocumentHandle,
        declared_type: str | None,
        reason: FallbackReason,
    ) -> Verdict:
        reference_content, candidate_content = self._extract_pair(reference, candidate)

        reference_classification = self._apply_declared_type(
            declared_type, self._classifier.classify(reference_content.cleaned_text)
        )
        candidate_classification = self._classifier.classify(candidate_content.cleaned_text)
        similarity = compare(reference_content.cleaned_text, candidate_content.cleaned_text)
        status, message = classify_ocr_verdict(similarity.final_similarity)

        type_match = (
            reference_classification.canonical_type is not None
            and reference_classification.canonical_type == candidate_classification.canonical_type
        )
        advisory = QUOTA_ADVISORY if reason.kind is FallbackKind.QUOTA_EXHAUSTED else None
        return Verdict(
            status=status,
            message=message,
            mode=VerificationMode.OCR_FALLBACK,
            similarity=similarity,
            reference_classification=reference_classification,
            candidate_classification=candidate_classification,
            credential_type_match=type_match,
            fallback_reason=reason,
            advisory=advisory,
            type_warning=_type_warning(reference_classification, candidate_classification),
            **self._text_fields(reference_content, candidate_content),
        )

    def _extract_pair(
        self,
        reference: DocumentHandle,
        candidate: DocumentHandle,
    ) -> tuple[ExtractedContent, ExtractedContent]:
        reference_content = self._text_extractor.extract(reference)
        candidate_content = self._text_extractor.extract(candidate)
        reference_length = reference_content.cleaned_length
        candidate_length = candidate_content.cleaned_length
        Log.info(
            "Extracted text from both documents",
            reference_chars=reference_length,
            candidate_chars=candidate_length,
        )

        if reference_length < self._min_text_chars or candidate_length < self._min_text_chars:
            raise InsufficientContentError(
                INSUFFICIENT_CONTENT_MESSAGE,
                reference_length=reference_length,
                candidate_length=candidate_length,
            )
        if min(reference_length, candidate_length) < self._low_text_warning_chars:
            Log.warning(
                "Very little text extracted; comparison accuracy may be reduced",
                reference_chars=reference_length,
                candidate_chars=candidate_length,
            )
        return reference_content, candidate_content

    def _classify_ai_analysis(
        self,
        analysis: DocumentAnalysis,
        content: ExtractedContent,
    ) -> CredentialClassification:
        if analysis.canonical_type is None:
            Log.info(
                f"AI label '{analysis.document_type}' is not a known credential type; "
                "using text rules"
            )
            return self._classifier.classify(content.cleaned_text)
        return CredentialClassification(
            canonical_type=analysis.canonical_type,
            raw_label=analysis.document_type,
            confidence=analysis.confidence,
        )

    def _apply_declared_type(
        self,
        declared_type: str | None,
        detected: CredentialClassification,
    ) -> CredentialClassification:
        if not declared_type:
            return detected
        declared = self._classifier.classify_label(declared_type)
        if declared.canonical_type is None:
            Log.warning(f"Declared type '{declared_type}' is not a known credential type")
            return detected
        Log.info(f"Using declared reference type: {declared.label}")
        return declared

    @staticmethod
    def _text_fields(
        reference_content: ExtractedContent,
        candidate_content: ExtractedContent,
    ) -> dict[str, object]:
        return {
            "reference_sections": extract_key_sections(reference_content.cleaned_text),
            "candidate_sections": extract_key_sections(candidate_content.cleaned_text),
            "reference_text": reference_content.cleaned_text[:TEXT_PREVIEW_CHARS],
            "candidate_text": candidate_content.cleaned_text[:TEXT_PREVIEW_CHARS],
        }


def _type_warning(
    reference: CredentialClassification,
    candidate: CredentialClassification,
) -> str | None:
    if reference.canonical_type is None or candidate.canonical_type is None:
        return TYPE_WARNING
    return None


def _log_fallback(reason: FallbackReason) -> None:
    message = f"AI path unavailable, falling back to OCR-only comparison: {reason.detail}"
    if reason.kind is FallbackKind.INVALID_CREDENTIALS:
        Log.error(message, reason=reason.kind.value)
    else:
        Log.warning(message, reason=reason.kind.value)


def _failure_for(exc: Exception) -> VerificationFailure:
    if isinstance(exc, InsufficientContentError):
        return VerificationFailure(
            error=FailureKind.INSUFFICIENT_CONTENT,
            message=str(exc),
            reference_text_length=exc.reference_length,
            candidate_text_length=exc.candidate_length,
        )
    if isinstance(exc, FetchError):
        return VerificationFailure(
            error=FailureKind.FETCH_FAILED,
            message=FETCH_FAILED_MESSAGE,
            detail=str(exc),
        )
    return VerificationFailure(
        error=FailureKind.EXTRACTION_FAILED,
        message=EXTRACTION_FAILED_MESSAGE,
        detail=str(exc),
    )


def build_verifier(settings: Settings) -> CredentialVerifier:
    """Build a CredentialVerifier with all required adapters."""
    temp_dir = Path(settings.temp_dir)
    rasterizer = PdfRasterizer(scale=settings.pdf_render_scale)
    classifier = CredentialClassifier()
    text_extractor = TextExtractor(
        text_layer_extractor=TextLayerExtractorFactory.create(settings),
        ocr_engine=TesseractAdapter(language=settings.ocr_language, config=settings.ocr_config),
        rasterizer=rasterizer,
        temp_dir=temp_dir,
        min_text_layer_chars=settings.pdf_text_min_chars,
    )
    fetcher = IpfsFetcher(
        gateway_url=settings.ipfs_gateway_url,
        timeout_seconds=settings.fetch_timeout_seconds,
    )
    vision_analyzer = VisionAnalyzerFactory.create(
        settings, rasterizer=rasterizer, classifier=classifier
    )
    return CredentialVerifier(
        fetcher=fetcher,
        text_extractor=text_extractor,
        classifier=classifier,
        vision_analyzer=vision_analyzer,
        temp_dir=temp_dir,
        min_text_chars=settings.min_text_chars,
        low_text_warning_chars=settings.low_text_warning_chars,
    )
