from dataclasses import dataclass


@dataclass(frozen=True)
class ExtractionJob:
    """Background extraction work for one pending contract record."""

    contract_id: str
    pdf_name: str
    text: str
