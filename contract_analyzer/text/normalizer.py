import re

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_text(raw: str) -> str:
    """Collapse extracted PDF text into a single clean line.

    Non-breaking spaces and every other whitespace run (newlines, tabs,
    carriage returns) become one ordinary space; both ends are stripped.

    Returns:
        The normalized text, or "" when the source has no visible characters.
        Callers treat "" as a terminal "no extractable text" condition.
    """
    if not raw:
        return ""
    return _WHITESPACE_RE.sub(" ", raw.replace("\u00a0", " ")).strip()
