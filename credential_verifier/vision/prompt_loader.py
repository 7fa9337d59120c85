from pathlib import Path

from credential_verifier.vision.exceptions import PromptLoadError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"

CLASSIFY_DOCUMENT = "classify_document"
COMPARE_DOCUMENTS = "compare_documents"
AUTHENTICITY_MARKERS = "authenticity_markers"
SYSTEM = "system"


def load_prompt(name: str, prompt_dir: Path | None = None) -> str:
    """Load the prompt template ``<name>.txt``.

    Args:
        name: Template name without extension.
        prompt_dir: Directory holding the templates.
                    Defaults to the bundled prompts directory.

    Raises:
        PromptLoadError: if the file cannot be read.
    """
    path = (prompt_dir or _DEFAULT_PROMPT_DIR) / f"{name}.txt"
    try:
        return path.read_text(encoding="utf-8").strip()
    except OSError as exc:
        raise PromptLoadError(f"Failed to load prompt '{name}': {exc}") from exc
