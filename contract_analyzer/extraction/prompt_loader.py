from pathlib import Path

from contract_analyzer.extraction.exceptions import ExtractionError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"

FIELDS_PROMPT_FILE = "fields_prompt.txt"
SUBMITTALS_PROMPT_FILE = "submittals_prompt.txt"


def load_prompt_template(name: str, path: Path | None = None) -> str:
    """Load a prompt template from a file.

    Args:
        name: File name of the bundled template, used when path is None.
        path: Explicit template path overriding the bundled one.

    Returns:
        The raw template string with str.format placeholders.

    Raises:
        ExtractionError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / name
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ExtractionError(f"Failed to load prompt template: {exc}") from exc
