"""Ordered category rules for credential classification.

Rules are evaluated top to bottom. "Certificate of Graduation" leads
because its body text routinely names the degree that was completed
("... completed the Bachelor of Science program"); the degree phrases
must not get a chance to claim it first.

* ``phrases``: multi-word phrases, scanned across every rule before any
  single keyword is considered.
* ``keywords``: single words, scored by length when no phrase matched.
* ``label_patterns``: regexes used to coerce free-text labels (AI output,
  database records) into the canonical set.
"""

import re
from dataclasses import dataclass

from credential_verifier.classification.models import CredentialType


@dataclass(frozen=True)
class CategoryRule:
    category: CredentialType
    phrases: tuple[str, ...] = ()
    keywords: tuple[str, ...] = ()
    label_patterns: tuple[re.Pattern[str], ...] = ()


def _patterns(*sources: str) -> tuple[re.Pattern[str], ...]:
    return tuple(re.compile(source) for source in sources)


CATEGORY_RULES: tuple[CategoryRule, ...] = (
    CategoryRule(
        category=CredentialType.CERTIFICATE_OF_GRADUATION,
        phrases=(
            "certificate of graduation",
            "graduation certificate",
            "completion certificate",
            "certificate of completion",
        ),
        label_patterns=_patterns(
            r"certificate of graduation",
            r"graduation certificate",
            r"completion certificate",
            r"certificate of completion",
        ),
    ),
    CategoryRule(
        category=CredentialType.TRANSCRIPT,
        phrases=(
            "transcript of records",
            "transcript of record",
            "academic transcript",
            "official transcript",
            "student transcript",
        ),
        keywords=("transcript",),
        label_patterns=_patterns(
            r"transcript",
            r"\btor\b",
            r"academic record",
            r"grade report",
        ),
    ),
    CategoryRule(
        category=CredentialType.PHD_DEGREE,
        phrases=(
            "doctor of philosophy",
            "ph.d. degree",
            "ph.d degree",
            "phd degree",
            "doctorate degree",
            "doctoral degree",
        ),
        label_patterns=_patterns(
            r"\bphd\b",
            r"\bph\.\s?d",
            r"doctorate",
            r"doctoral",
            r"doctor of philosophy",
        ),
    ),
    CategoryRule(
        category=CredentialType.MASTER_DEGREE,
        phrases=(
            "master's degree",
            "masters degree",
            "master of science",
            "master of arts",
            "master of business",
        ),
        label_patterns=_patterns(r"master", r"\bmba\b", r"postgraduate degree"),
    ),
    CategoryRule(
        category=CredentialType.BACHELOR_DEGREE,
        phrases=(
            "bachelor's degree",
            "bachelors degree",
            "bachelor of science",
            "bachelor of arts",
            "baccalaureate",
        ),
        label_patterns=_patterns(r"bachelor", r"baccalaureate", r"undergraduate degree"),
    ),
    CategoryRule(
        category=CredentialType.DIPLOMA,
        phrases=("advanced diploma", "graduate diploma"),
        keywords=("diploma",),
        label_patterns=_patterns(r"diploma"),
    ),
    CategoryRule(
        category=CredentialType.CERTIFICATE,
        phrases=("certificate of achievement", "certificate of participation"),
        keywords=("certificate",),
        label_patterns=_patterns(r"certificate", r"certification"),
    ),
    CategoryRule(
        category=CredentialType.ACHIEVEMENT_AWARD,
        phrases=("achievement award", "award for", "awarded to"),
        keywords=("award", "achievement"),
        label_patterns=_patterns(r"award", r"achievement", r"\bhonou?rs?\b"),
    ),
    CategoryRule(
        category=CredentialType.LETTER_OF_RECOMMENDATION,
        phrases=(
            "letter of recommendation",
            "recommendation letter",
            "reference letter",
            "letter of reference",
        ),
        keywords=("recommendation",),
        label_patterns=_patterns(
            r"recommendation",
            r"reference letter",
            r"letter of reference",
        ),
    ),
)
