from dataclasses import dataclass, field

FIELD_LIST: tuple[str, ...] = (
    "ClientName",
    "FundingAgency",
    "BiddingSystem",
    "NameOfWork",
    "ProjectLocation",
    "CompletionPeriod",
    "EstimatedCost",
    "TenderDocumentCost",
    "EMD",
    "ImportantDates",
    "BidValidity",
    "TenderSecurity",
    "JointVenture",
    "PowerOfAttorney",
    "GroundsForBidRejection",
    "EligibilityCriteria",
    "SiteVisit",
    "GeotechnicalReports",
    "LandAvailability",
)

ContractFields = dict[str, object]


@dataclass(frozen=True)
class Submittal:
    """A document the bidder must submit, or a page with blanks to fill."""

    item: str = ""
    page: int | None = None
    reason: str = ""

    def to_dict(self) -> dict[str, object]:
        return {"item": self.item, "page": self.page, "reason": self.reason}


@dataclass(frozen=True)
class ExtractionResult:
    """Output of both extraction calls for one document."""

    fields: ContractFields
    submittals: list[Submittal] = field(default_factory=list)
