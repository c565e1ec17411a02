from pathlib import Path

from app.ai.exceptions import PromptLoadError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"

CLASSIFICATION_PROMPT = "classification_prompt.txt"
SUMMARY_PROMPT = "summary_prompt.txt"


def load_prompt_template(name: str, prompt_dir: Path | None = None) -> str:
    """Load a prompt template by file name.

    Args:
        name: Template file name, e.g. CLASSIFICATION_PROMPT.
        prompt_dir: Directory holding the templates.
                    Defaults to the bundled prompts directory.

    Returns:
        The raw template string with {file_name}, {document_id} and {content}
        placeholders.

    Raises:
        PromptLoadError: if the file cannot be read.
    """
    path = (prompt_dir or _DEFAULT_PROMPT_DIR) / name
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise PromptLoadError(f"Failed to load prompt template: {exc}") from exc
