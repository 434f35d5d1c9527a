"""Recover a JSON value from free-form provider output.

Providers often wrap valid JSON in markdown fences or explanatory prose.
The recovery is deliberately shallow:
1. Strip a leading ```lang line and a trailing ``` around the whole text.
2. Parse the cleaned text as-is.
3. Parse the span from the first '{' to the last '}' inclusive.
4. Give up with InvalidResponseFormatError.

Trailing commas, unescaped quotes and truncated output stay fatal.
"""

import json
import re
from typing import Any

from contract_analyzer.extraction.exceptions import InvalidResponseFormatError

_LEADING_FENCE_RE = re.compile(r"^\s*```[A-Za-z0-9_+-]*[ \t]*\n?")
_TRAILING_FENCE_RE = re.compile(r"\n?\s*```\s*$")


def strip_code_fences(text: str) -> str:
    """Remove the fence wrapping the whole response. Backticks inside it are kept."""
    stripped = _LEADING_FENCE_RE.sub("", text, count=1)
    return _TRAILING_FENCE_RE.sub("", stripped, count=1).strip()


def extract_json(text: str) -> Any:
    """Parse provider output into a JSON value.

    Raises:
        InvalidResponseFormatError: if neither the cleaned text nor its
            outermost brace-delimited span is valid JSON.
    """
    cleaned = strip_code_fences(text)
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError:
        pass

    first = cleaned.find("{")
    last = cleaned.rfind("}")
    if first == -1 or last <= first:
        raise InvalidResponseFormatError("Model response is not valid JSON")

    try:
        return json.loads(cleaned[first:last + 1])
    except json.JSONDecodeError as exc:
        raise InvalidResponseFormatError(f"Model response is not valid JSON: {exc}") from exc
