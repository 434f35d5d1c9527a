from abc import ABC, abstractmethod

from contract_analyzer.extraction.models import ContractFields, Submittal


class BaseExtractor(ABC):
    """Contract for all structured-extraction adapters."""

    @abstractmethod
    def extract_fields(self, document_name: str, text: str) -> ContractFields:
        """Extract the fixed contract fields from normalized document text.

        Returns:
            Mapping containing every fixed field name; absent values are None.

        Raises:
            ExtractionError: on any failure.
        """

    @abstractmethod
    def extract_submittals(self, document_name: str, text: str) -> list[Submittal]:
        """Extract the list of bid submittals from normalized document text.

        Raises:
            ExtractionError: on any failure.
        """
