from dataclasses import dataclass

from contract_analyzer.config.settings import Settings
from contract_analyzer.database.connection import Database
from contract_analyzer.database.repositories.contract_repository import ContractRepository
from contract_analyzer.processor.processor import Processor, build_processor
from contract_analyzer.worker.job_runner import JobRunner
from contract_analyzer.worker.worker import Worker


@dataclass
class AppContainer:
    """Long-lived objects shared by every request."""

    settings: Settings
    database: Database
    contract_repo: ContractRepository
    processor: Processor
    worker: Worker


def build_container(settings: Settings) -> AppContainer:
    """Wire the database, extraction pipeline and worker from settings."""
    database = Database(settings)
    contract_repo = ContractRepository(database)
    processor = build_processor(settings, contract_repo)
    worker = Worker(JobRunner(processor, contract_repo), settings.worker_concurrency)
    return AppContainer(
        settings=settings,
        database=database,
        contract_repo=contract_repo,
        processor=processor,
        worker=worker,
    )
