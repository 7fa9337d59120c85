import re

from credential_verifier.classification.models import (
    Confidence,
    CredentialClassification,
    CredentialType,
)
from credential_verifier.classification.rules import CATEGORY_RULES, CategoryRule
from credential_verifier.logging.logger import Log

_WHITESPACE_RE = re.compile(r"\s+")


def _prepare(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text.replace("\u2019", "'")).strip().lower()


class CredentialClassifier:
    """Maps document text or free-text labels onto ``CredentialType``.

    Text classification runs in two passes: every multi-word phrase of every
    rule, in rule order, then single keywords where the longest matching
    keyword wins (ties go to the earlier rule).
    """

    MIN_TEXT_CHARS = 10

    def __init__(self, rules: tuple[CategoryRule, ...] = CATEGORY_RULES) -> None:
        self._rules = rules

    def classify(self, text: str) -> CredentialClassification:
        prepared = _prepare(text or "")
        if len(prepared) < self.MIN_TEXT_CHARS:
            Log.debug("Text too short for credential type identification")
            return CredentialClassification()

        result = self._match_phrase(prepared) or self._match_keyword(prepared)
        if result is None:
            Log.info("No credential type identified from text")
            return CredentialClassification()
        Log.info(
            f"Credential type identified: {result.label}",
            pattern=result.matched_pattern,
        )
        return result

    def normalize(self, raw_label: str | None) -> CredentialType | None:
        """Coerce a free-text label into the canonical set, or None."""
        if not raw_label:
            return None
        prepared = _prepare(raw_label)
        for rule in self._rules:
            if any(pattern.search(prepared) for pattern in rule.label_patterns):
                return rule.category
        return None

    def classify_label(
        self,
        raw_label: str | None,
        confidence: Confidence | None = Confidence.HIGH,
    ) -> CredentialClassification:
        """Classification for a label that came from the AI service or a database record."""
        canonical = self.normalize(raw_label)
        return CredentialClassification(
            canonical_type=canonical,
            raw_label=raw_label,
            confidence=confidence if canonical else None,
        )

    def _match_phrase(self, text: str) -> CredentialClassification | None:
        for rule in self._rules:
            for phrase in rule.phrases:
                if phrase in text:
                    return CredentialClassification(
                        canonical_type=rule.category,
                        raw_label=phrase,
                        confidence=Confidence.HIGH,
                        matched_pattern=phrase,
                    )
        return None

    def _match_keyword(self, text: str) -> CredentialClassification | None:
        best: tuple[int, CategoryRule, str] | None = None
        for rule in self._rules:
            for keyword in rule.keywords:
                if keyword in text and (best is None or len(keyword) > best[0]):
                    best = (len(keyword), rule, keyword)
        if best is None:
            return None
        _, rule, keyword = best
        return CredentialClassification(
            canonical_type=rule.category,
            raw_label=keyword,
            confidence=Confidence.MEDIUM,
            matched_pattern=keyword,
        )
