"""Post-processing for OCR output.

Steps, in order: strip invisible characters, normalize quote/dash/ellipsis
glyphs, transliterate accented Latin to ASCII (ICU ``Latin-ASCII``), rejoin
words hyphenated across line breaks, repair pipes read in place of a
capital I, collapse horizontal whitespace, cap blank lines at one, fix
spacing around punctuation, and normalize GPA / ID / honorific spellings.
Digits are never rewritten: numeric tokens drive the tampering penalty.
"""

import re
import unicodedata

import icu  # type: ignore[import-untyped]

_ICU_TRANSFORM = "Latin-ASCII"

_INVISIBLE_RE = re.compile("[\u200b\u200c\u200d\u2060\ufeff\u00ad]")
_DOUBLE_QUOTE_RE = re.compile("[\u201c\u201d\u201e\u201f\u2033\u00ab\u00bb]")
_SINGLE_QUOTE_RE = re.compile("[\u2018\u2019\u201a\u201b\u2032`\u00b4]")
_DASH_RE = re.compile("[\u2010\u2011\u2012\u2013\u2014\u2015\u2212]")
_ELLIPSIS_RE = re.compile("\u2026")

_HYPHEN_BREAK_RE = re.compile(r"([a-z])-\n([a-z])")
_PIPE_AS_I_RE = re.compile(r"(?<!\S)\|(?!\S)")
_HORIZONTAL_SPACE_RE = re.compile(r"[ \t\f\v\r]+")
_SPACE_AROUND_NEWLINE_RE = re.compile(r" *\n *")
_EXCESS_NEWLINES_RE = re.compile(r"\n{3,}")

_SPACE_BEFORE_PUNCT_RE = re.compile(r" +([,.;:!?])")
_MISSING_SPACE_AFTER_PUNCT_RE = re.compile(r"([,;:])(?=[A-Za-z])")
_MISSING_SPACE_AFTER_PERIOD_RE = re.compile(r"(?<=[a-z]{2})\.(?=[A-Z][a-z])")

_GPA_RE = re.compile(r"\bG\s?\.\s?P\s?\.\s?A\b\.?|\bgpa\b", re.IGNORECASE)
_ID_RE = re.compile(r"\bI\s?\.\s?D\b\.?|\bId(?=\s*(?:No\b|Number\b|#))", re.IGNORECASE)
_HONORIFIC_RE = re.compile(r"\b(Mrs|Mr|Ms|Dr|Prof|MRS|MR|DR|PROF)\b\.?[ ]*(?=[A-Z])")

_transliterator: icu.Transliterator | None = None


def _transliterate(text: str) -> str:
    global _transliterator  # noqa: PLW0603
    if _transliterator is None:
        _transliterator = icu.Transliterator.createInstance(_ICU_TRANSFORM)
    return _transliterator.transliterate(text)


def normalize_glyphs(text: str) -> str:
    text = unicodedata.normalize("NFC", text)
    text = _INVISIBLE_RE.sub("", text)
    text = _DOUBLE_QUOTE_RE.sub('"', text)
    text = _SINGLE_QUOTE_RE.sub("'", text)
    text = _DASH_RE.sub("-", text)
    text = _ELLIPSIS_RE.sub("...", text)
    return _transliterate(text)


def normalize_whitespace(text: str) -> str:
    text = text.replace("\r\n", "\n")
    text = _HORIZONTAL_SPACE_RE.sub(" ", text)
    text = _SPACE_AROUND_NEWLINE_RE.sub("\n", text)
    return _EXCESS_NEWLINES_RE.sub("\n\n", text)


def normalize_punctuation(text: str) -> str:
    text = _SPACE_BEFORE_PUNCT_RE.sub(r"\1", text)
    text = _MISSING_SPACE_AFTER_PUNCT_RE.sub(r"\1 ", text)
    return _MISSING_SPACE_AFTER_PERIOD_RE.sub(". ", text)


def normalize_abbreviations(text: str) -> str:
    text = _GPA_RE.sub("GPA", text)
    text = _ID_RE.sub("ID", text)
    return _HONORIFIC_RE.sub(lambda m: f"{m.group(1).capitalize()}. ", text)


def clean_ocr_text(text: str) -> str:
    """Return *text* with OCR noise normalized; never alters digits."""
    if not text:
        return ""
    text = normalize_glyphs(text)
    text = _HYPHEN_BREAK_RE.sub(r"\1\2", text.replace("\r\n", "\n"))
    text = _PIPE_AS_I_RE.sub("I", text)
    text = normalize_whitespace(text)
    text = normalize_punctuation(text)
    text = normalize_abbreviations(text)
    return text.strip()
