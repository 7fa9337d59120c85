"""Verdict decision tables.

Each table is evaluated top to bottom and the first matching rule wins.
The AI table combines visual tampering severity with text similarity; the
OCR-only table has no visual corroboration and uses similarity bands.
The thresholds are calibration values, not derived constants.
"""

from collections.abc import Callable
from dataclasses import dataclass

from credential_verifier.verification.models import VerdictStatus
from credential_verifier.vision.models import TamperingSeverity


@dataclass(frozen=True)
class VerdictSignals:
    text_similarity: float
    tampering_severity: TamperingSeverity | None = None
    exact_same_document: bool = False


@dataclass(frozen=True)
class VerdictRule:
    name: str
    applies: Callable[[VerdictSignals], bool]
    status: VerdictStatus
    message: str


AI_RULES: tuple[VerdictRule, ...] = (
    VerdictRule(
        "severe_visual_tampering",
        lambda s: s.tampering_severity is TamperingSeverity.SEVERE,
        VerdictStatus.FRAUDULENT,
        "ALERT: Strong indicators of tampering or fraud detected",
    ),
    VerdictRule(
        "text_mismatch",
        lambda s: s.text_similarity < 60,
        VerdictStatus.FRAUDULENT,
        "ALERT: Document text differs substantially from the issued credential",
    ),
    VerdictRule(
        "needs_review",
        lambda s: s.text_similarity < 75 or s.tampering_severity is TamperingSeverity.MODERATE,
        VerdictStatus.SUSPICIOUS,
        "Warning: Differences detected that require review",
    ),
    VerdictRule(
        "identical",
        lambda s: s.exact_same_document and s.text_similarity >= 95,
        VerdictStatus.IDENTICAL,
        "Documents are identical - perfect match",
    ),
)
AI_DEFAULT = (VerdictStatus.AUTHENTIC, "Files appear to be authentic and match")

OCR_RULES: tuple[VerdictRule, ...] = (
    VerdictRule(
        "identical",
        lambda s: s.text_similarity >= 95,
        VerdictStatus.IDENTICAL,
        "Documents appear identical (OCR-only comparison)",
    ),
    VerdictRule(
        "authentic",
        lambda s: s.text_similarity >= 80,
        VerdictStatus.AUTHENTIC,
        "Files appear to match (OCR-only comparison)",
    ),
    VerdictRule(
        "partial_match",
        lambda s: s.text_similarity >= 60,
        VerdictStatus.SUSPICIOUS,
        "Partial match - review recommended (OCR-only comparison)",
    ),
)
OCR_DEFAULT = (
    VerdictStatus.FRAUDULENT,
    "Significant differences detected (OCR-only comparison)",
)


def evaluate(
    rules: tuple[VerdictRule, ...],
    default: tuple[VerdictStatus, str],
    signals: VerdictSignals,
) -> tuple[VerdictStatus, str]:
    for rule in rules:
        if rule.applies(signals):
            return rule.status, rule.message
    return default


def classify_ai_verdict(
    text_similarity: float,
    tampering_severity: TamperingSeverity,
    exact_same_document: bool,
) -> tuple[VerdictStatus, str]:
    signals = VerdictSignals(
        text_similarity=text_similarity,
        tampering_severity=tampering_severity,
        exact_same_document=exact_same_document,
    )
    return evaluate(AI_RULES, AI_DEFAULT, signals)


def classify_ocr_verdict(text_similarity: float) -> tuple[VerdictStatus, str]:
    return evaluate(OCR_RULES, OCR_DEFAULT, VerdictSignals(text_similarity=text_similarity))
