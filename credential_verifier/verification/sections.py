from credential_verifier.verification.models import KeySections

SECTION_LINES = 5


def extract_key_sections(text: str) -> KeySections:
    """Split text into header (first 5 lines), body and footer (last 5 lines).

    Blank lines are ignored. Short documents repeat lines between header
    and footer rather than leaving either empty.
    """
    lines = [line for line in text.splitlines() if line.strip()]
    if not lines:
        return KeySections()
    body_end = max(SECTION_LINES, len(lines) - SECTION_LINES)
    return KeySections(
        header="\n".join(lines[:SECTION_LINES]),
        body="\n".join(lines[SECTION_LINES:body_end]),
        footer="\n".join(lines[-SECTION_LINES:]),
    )
