"""Validates parsed AI replies and builds typed vision results.

The AI path is all-or-nothing: a reply missing a required field raises
``MalformedResponseError`` and the caller falls back to OCR-only mode.
Both the nested layout the prompts ask for and a flat layout are accepted
for the fields that drive the verdict.
"""

import math
from typing import Any

from credential_verifier.classification.models import Confidence, CredentialType
from credential_verifier.vision.exceptions import MalformedResponseError
from credential_verifier.vision.models import (
    AuthenticityMarkers,
    DocumentAnalysis,
    TamperingField,
    TamperingSeverity,
    VisualComparison,
)

_MAX_TAMPERING_FIELDS = 50


def build_document_analysis(
    data: dict[str, Any],
    canonical_type: CredentialType | None = None,
) -> DocumentAnalysis:
    document_type = data.get("documentType")
    if not document_type or not isinstance(document_type, str):
        raise MalformedResponseError("'documentType' must be a non-empty string")
    visual_elements = data.get("visualElements")
    return DocumentAnalysis(
        document_type=document_type,
        canonical_type=canonical_type,
        confidence=Confidence.parse(data.get("confidence")),
        institution_name=_optional_str(data.get("institutionName")),
        recipient_name=_optional_str(data.get("recipientName")),
        issue_date=_optional_str(data.get("issueDate")),
        is_credential=_optional_bool(data.get("isCredential")),
        visual_elements=visual_elements if isinstance(visual_elements, dict) else {},
        notes=_optional_str(data.get("notes")),
    )


def build_visual_comparison(data: dict[str, Any]) -> VisualComparison:
    same_type = _require_bool(data, "sameCredentialType")
    exact_same = _require_bool(data, "exactSameDocument")

    indicators = _optional_dict(data.get("tamperingIndicators"))
    raw_severity = indicators.get("severity", data.get("tamperingSeverity"))
    severity = TamperingSeverity.parse(raw_severity)
    if severity is None:
        raise MalformedResponseError(
            f"Tampering severity must be one of {[s.value for s in TamperingSeverity]}, "
            f"got {raw_severity!r}"
        )

    markers = _optional_dict(data.get("authenticityMarkers"))
    raw_score = markers.get("overallAuthenticityScore", data.get("authenticityScore"))
    score = _score(raw_score, "authenticity score")

    detected = _optional_bool(indicators.get("detected"))
    return VisualComparison(
        same_credential_type=same_type,
        exact_same_document=exact_same,
        match_confidence=Confidence.parse(data.get("matchConfidence")),
        tampering_severity=severity,
        authenticity_score=score,
        specific_tampering=_build_tampering_fields(data.get("specificTampering")),
        tampering_detected=detected if detected is not None else severity is not TamperingSeverity.NONE,
        seal_match=_optional_bool(markers.get("sealMatch")),
        signature_match=_optional_bool(markers.get("signatureMatch")),
        recommendation=_optional_str(data.get("recommendation")),
        detailed_analysis=_optional_str(data.get("detailedAnalysis")),
    )


def build_authenticity_markers(data: dict[str, Any]) -> AuthenticityMarkers:
    raw_score = data.get("overallAuthenticityScore")
    concerns = data.get("concerns")
    return AuthenticityMarkers(
        seal_present=_presence(data, "officialSeal", "sealPresent"),
        signature_present=_presence(data, "signatures", "signaturePresent"),
        stamp_present=_presence(data, "stamps", "stampPresent"),
        overall_authenticity_score=_score(raw_score, "overallAuthenticityScore"),
        concerns=[str(c) for c in concerns] if isinstance(concerns, list) else [],
    )


def _build_tampering_fields(raw: Any) -> list[TamperingField]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise MalformedResponseError("'specificTampering' must be a list")
    fields: list[TamperingField] = []
    for index, item in enumerate(raw[:_MAX_TAMPERING_FIELDS]):
        if not isinstance(item, dict):
            raise MalformedResponseError(f"Tampering entry at index {index} must be an object")
        name = item.get("field")
        if not name or not isinstance(name, str):
            raise MalformedResponseError(
                f"Tampering entry at index {index}: 'field' must be a non-empty string"
            )
        fields.append(
            TamperingField(
                field=name,
                reference_value=_text(item.get("referenceValue", item.get("verifiedValue"))),
                candidate_value=_text(item.get("candidateValue", item.get("uploadedValue"))),
                location=_text(item.get("location")),
                method=_text(item.get("method")),
                severity=TamperingSeverity.parse(item.get("severity")) or TamperingSeverity.MINOR,
            )
        )
    return fields


def _presence(data: dict[str, Any], nested_key: str, flat_key: str) -> bool:
    block = data.get(nested_key)
    if isinstance(block, dict) and isinstance(block.get("present"), bool):
        return bool(block["present"])
    flat = data.get(flat_key)
    if isinstance(flat, bool):
        return flat
    raise MalformedResponseError(f"Missing presence flag for '{nested_key}'")


def _require_bool(data: dict[str, Any], key: str) -> bool:
    value = data.get(key)
    if not isinstance(value, bool):
        raise MalformedResponseError(f"'{key}' must be a boolean, got {value!r}")
    return value


def _score(raw: Any, name: str) -> int:
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise MalformedResponseError(f"'{name}' must be a number, got {raw!r}")
    if not math.isfinite(raw):
        raise MalformedResponseError(f"'{name}' must be finite, got {raw!r}")
    return max(0, min(100, round(raw)))


def _optional_dict(raw: Any) -> dict[str, Any]:
    return raw if isinstance(raw, dict) else {}


def _optional_bool(raw: Any) -> bool | None:
    return raw if isinstance(raw, bool) else None


def _optional_str(raw: Any) -> str | None:
    if raw is None or (isinstance(raw, str) and raw.strip().lower() in ("", "null", "none")):
        return None
    return str(raw)


def _text(raw: Any) -> str:
    return "" if raw is None else str(raw)
