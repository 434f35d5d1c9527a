from dataclasses import dataclass, field
from datetime import datetime

from contract_analyzer.extraction.models import ContractFields, Submittal

STATUS_PENDING = "pending"
STATUS_PROCESSING = "processing"
STATUS_COMPLETED = "completed"
STATUS_FAILED = "failed"


@dataclass
class ContractRecord:
    """Represents a row from the contracts table."""

    id: str
    pdf_name: str
    status: str
    fields: ContractFields | None = None
    submittals: list[Submittal] = field(default_factory=list)
    error_message: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def has_fields(self) -> bool:
        return bool(self.fields)

    @property
    def has_submittals(self) -> bool:
        return len(self.submittals) > 0


@dataclass(frozen=True)
class ContractSummary:
    """One row of the upload history listing."""

    id: str
    pdf_name: str
    status: str
    created_at: datetime | None = None
