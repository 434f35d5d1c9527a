from contract_analyzer.config.settings import Settings
from contract_analyzer.database.models import ContractRecord
from contract_analyzer.database.repositories.contract_repository import ContractRepository
from contract_analyzer.extraction.base import BaseExtractor
from contract_analyzer.extraction.factory import ExtractorFactory
from contract_analyzer.extraction.models import ExtractionResult, Submittal
from contract_analyzer.logging.logger import Log
from contract_analyzer.pdf.base import BasePdfExtractor
from contract_analyzer.pdf.factory import PdfExtractorFactory
from contract_analyzer.processor.exceptions import (
    EmptyExtractedTextError,
    NoFileUploadedError,
)
from contract_analyzer.processor.models import ExtractionJob
from contract_analyzer.text.normalizer import normalize_text


class Processor:
    """Orchestrates the contract analysis pipeline.

    Pipeline: extract text -> normalize -> fields -> submittals -> persist.
    The synchronous flow runs all of it inside the request; the asynchronous
    flow stops after creating a pending record and hands an ExtractionJob to
    the worker, which calls process().
    """

    def __init__(
        self,
        pdf_extractor: BasePdfExtractor,
        extractor: BaseExtractor,
        contract_repo: ContractRepository,
    ) -> None:
        self._pdf_extractor = pdf_extractor
        self._extractor = extractor
        self._contract_repo = contract_repo

    def extract_text(self, pdf_bytes: bytes) -> str:
        """Extract and normalize the text layer of a PDF.

        Raises:
            PdfExtractionError: if the bytes are not a readable PDF.
            EmptyExtractedTextError: if nothing but whitespace was extracted.
        """
        text = normalize_text(self._pdf_extractor.extract(pdf_bytes))
        if not text:
            raise EmptyExtractedTextError("PDF contains no extractable text")
        Log.info(f"Extracted {len(text)} chars from {len(pdf_bytes)} bytes")
        return text

    def analyze(self, pdf_name: str, text: str) -> ExtractionResult:
        """Run field extraction then submittal extraction, one after the other."""
        fields = self._extractor.extract_fields(pdf_name, text)
        submittals = self._extractor.extract_submittals(pdf_name, text)
        return ExtractionResult(fields=fields, submittals=submittals)

    def summarize(self, pdf_name: str, pdf_bytes: bytes) -> ContractRecord:
        """Synchronous flow: extract everything, then store a completed record."""
        text = self.extract_text(pdf_bytes)
        result = self.analyze(pdf_name, text)
        record = self._contract_repo.create_completed(pdf_name, result.fields, result.submittals)
        Log.info(f"Contract {record.id} ({pdf_name}) completed")
        return record

    def prepare_job(self, pdf_name: str, pdf_bytes: bytes) -> tuple[ContractRecord, ExtractionJob]:
        """Asynchronous flow, request half: validate text and create a pending record."""
        text = self.extract_text(pdf_bytes)
        record = self._contract_repo.create(pdf_name)
        Log.info(f"Contract {record.id} ({pdf_name}) queued for extraction")
        return record, ExtractionJob(contract_id=record.id, pdf_name=pdf_name, text=text)

    def process(self, job: ExtractionJob) -> None:
        """Asynchronous flow, background half."""
        self._contract_repo.mark_processing(job.contract_id)
        Log.info(f"Contract {job.contract_id} processing")

        result = self.analyze(job.pdf_name, job.text)

        self._contract_repo.mark_completed(job.contract_id, result.fields, result.submittals)
        Log.info(
            f"Contract {job.contract_id} completed with {len(result.submittals)} submittals"
        )

    def submittals_for(
        self,
        contract_id: str,
        pdf_bytes: bytes | None = None,
        pdf_name: str | None = None,
    ) -> list[Submittal]:
        """Return stored submittals, extracting and storing them on first request.

        Raises:
            ContractNotFoundError: if the contract does not exist.
            NoFileUploadedError: if nothing is stored yet and no PDF was sent.
        """
        record = self._contract_repo.find_by_id(contract_id)
        if record.has_submittals:
            Log.info(f"Returning {len(record.submittals)} stored submittals for {contract_id}")
            return record.submittals
        if pdf_bytes is None:
            raise NoFileUploadedError("No PDF uploaded")

        text = self.extract_text(pdf_bytes)
        submittals = self._extractor.extract_submittals(pdf_name or record.pdf_name, text)
        self._contract_repo.update(contract_id, submittals=submittals)
        Log.info(f"Stored {len(submittals)} submittals for {contract_id}")
        return submittals


def build_processor(settings: Settings, contract_repo: ContractRepository) -> Processor:
    """Build a Processor with all required adapters."""
    return Processor(
        pdf_extractor=PdfExtractorFactory.create(settings),
        extractor=ExtractorFactory.create(settings),
        contract_repo=contract_repo,
    )
