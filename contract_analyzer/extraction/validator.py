"""Shapes parsed provider JSON into the stored fields and submittals."""

from collections.abc import Iterable
from typing import Any

from contract_analyzer.extraction.exceptions import InvalidResponseFormatError
from contract_analyzer.extraction.models import FIELD_LIST, ContractFields, Submittal
from contract_analyzer.logging.logger import Log


def build_fields(data: Any, field_list: Iterable[str] = FIELD_LIST) -> ContractFields:
    """Back-fill every fixed field the provider omitted with None.

    Keys the provider did return are kept unchanged, including extras.

    Raises:
        InvalidResponseFormatError: if data is not a JSON object.
    """
    if not isinstance(data, dict):
        raise InvalidResponseFormatError("Fields response must be a JSON object")
    fields: ContractFields = dict(data)
    for name in field_list:
        fields.setdefault(name, None)
    return fields


def build_submittals(data: Any) -> list[Submittal]:
    """Normalize a submittals response into Submittal records.

    Accepts {"submittals": [...]} or a bare array. A missing or null
    "submittals" key yields an empty list.

    Raises:
        InvalidResponseFormatError: if data is neither an object nor an array,
            or "submittals" is not an array.
    """
    if isinstance(data, dict):
        raw = data.get("submittals")
        if raw is None:
            raw = []
    elif isinstance(data, list):
        raw = data
    else:
        raise InvalidResponseFormatError("Submittals response must be a JSON object or array")
    if not isinstance(raw, list):
        raise InvalidResponseFormatError("'submittals' must be an array")

    submittals: list[Submittal] = []
    for index, item in enumerate(raw):
        submittal = _build_submittal(item)
        if submittal is None:
            Log.warning(f"Dropping submittal at index {index}: unsupported value {item!r}")
            continue
        submittals.append(submittal)
    return submittals


def _build_submittal(raw: Any) -> Submittal | None:
    if isinstance(raw, str):
        return Submittal(item=raw)
    if not isinstance(raw, dict):
        return None
    return Submittal(
        item=_as_text(raw.get("item")),
        page=_as_page(raw.get("page")),
        reason=_as_text(raw.get("reason")),
    )


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _as_page(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


def records_to_submittals(raw: Iterable[dict[str, Any]] | None) -> list[Submittal]:
    """Rebuild Submittal records from stored JSON rows."""
    return [
        Submittal(item=_as_text(r.get("item")), page=_as_page(r.get("page")),
                  reason=_as_text(r.get("reason")))
        for r in raw or []
    ]
