from pathlib import Path

from agenda_insights.extraction.exceptions import ExtractionError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"
_REQUIRED_PLACEHOLDERS = ("{categories}", "{document_text}")


def load_prompt_template(path: Path | None = None) -> str:
    """Load the extraction prompt template from a file.

    Args:
        path: Path to the prompt template file.
              Defaults to the bundled extraction_prompt.txt.

    Returns:
        The raw template string with ``{categories}`` and ``{document_text}``
        placeholders. Literal braces are doubled.

    Raises:
        ExtractionError: if the file cannot be read or lacks a placeholder.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "extraction_prompt.txt"
    try:
        template = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ExtractionError(f"Failed to load prompt template: {exc}") from exc

    missing = [p for p in _REQUIRED_PLACEHOLDERS if p not in template]
    if missing:
        raise ExtractionError(f"Prompt template is missing placeholders: {missing}")
    return template
