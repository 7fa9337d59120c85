from credential_verifier.verification.models import KeySections
from credential_verifier.verification.sections import extract_key_sections


class TestExtractKeySections:
    def test_long_document(self) -> None:
        text = "\n".join(f"line {i}" for i in range(1, 13))
        sections = extract_key_sections(text)
        assert sections.header.splitlines() == [f"line {i}" for i in range(1, 6)]
        assert sections.body.splitlines() == ["line 6", "line 7"]
        assert sections.footer.splitlines() == [f"line {i}" for i in range(8, 13)]

    def test_blank_lines_ignored(self) -> None:
        sections = extract_key_sections("A\n\n   \nB")
        assert sections.header == "A\nB"

    def test_short_document(self) -> None:
        sections = extract_key_sections("Diploma\nMaria Santos\n2023")
        assert sections.header == sections.footer == "Diploma\nMaria Santos\n2023"
        assert sections.body == ""

    def test_empty(self) -> None:
        assert extract_key_sections("") == KeySections()
