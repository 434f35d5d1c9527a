from contract_analyzer.database.repositories.contract_repository import ContractRepository
from contract_analyzer.logging.logger import Log
from contract_analyzer.processor.models import ExtractionJob
from contract_analyzer.processor.processor import Processor


class JobRunner:
    """Run one extraction job and record any failure on the contract."""

    def __init__(self, processor: Processor, contract_repo: ContractRepository) -> None:
        self._processor = processor
        self._contract_repo = contract_repo

    def run(self, job: ExtractionJob) -> None:
        """Execute a single job. Never raises."""
        Log.info(f"Running extraction for contract {job.contract_id}")
        try:
            self._processor.process(job)
            Log.info(f"Extraction for contract {job.contract_id} completed successfully")
        except Exception as exc:
            self._handle_failure(job, exc)

    def _handle_failure(self, job: ExtractionJob, exc: Exception) -> None:
        """Mark the contract failed. Jobs are not retried."""
        Log.exception(f"Extraction for contract {job.contract_id} failed: {exc}")
        try:
            self._contract_repo.mark_failed(job.contract_id, str(exc) or type(exc).__name__)
        except Exception as store_exc:
            Log.error(f"Could not mark contract {job.contract_id} failed: {store_exc}")
