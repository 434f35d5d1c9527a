import queue
import threading

from contract_analyzer.logging.logger import Log
from contract_analyzer.processor.models import ExtractionJob
from contract_analyzer.worker.job_runner import JobRunner


class Worker:
    """In-process job queue: submit -> queue -> daemon thread -> JobRunner."""

    def __init__(self, job_runner: JobRunner, concurrency: int = 1) -> None:
        self._job_runner = job_runner
        self._concurrency = concurrency
        self._queue: queue.Queue[ExtractionJob | None] = queue.Queue()
        self._threads: list[threading.Thread] = []

    @property
    def is_running(self) -> bool:
        return any(thread.is_alive() for thread in self._threads)

    @property
    def pending_jobs(self) -> int:
        return self._queue.qsize()

    def start(self) -> None:
        """Start the worker threads. Idempotent."""
        if self._threads:
            return
        for index in range(self._concurrency):
            thread = threading.Thread(
                target=self.run,
                name=f"extraction-worker-{index}",
                daemon=True,
            )
            thread.start()
            self._threads.append(thread)
        Log.info(f"Worker started with {self._concurrency} thread(s)")

    def submit(self, job: ExtractionJob) -> None:
        """Queue a job. Returns immediately."""
        self._queue.put(job)
        Log.debug(f"Queued extraction for contract {job.contract_id}")

    def stop(self, timeout: float | None = None) -> None:
        """Signal every thread to finish its current job and exit, then join."""
        if not self._threads:
            return
        for _ in self._threads:
            self._queue.put(None)
        for thread in self._threads:
            thread.join(timeout)
        self._threads = []
        Log.info("Worker stopped")

    def run(self, max_jobs: int | None = None) -> None:
        """Consume jobs until a stop sentinel arrives.

        If max_jobs is set, return after processing that many jobs (for testing).
        """
        jobs_done = 0
        while max_jobs is None or jobs_done < max_jobs:
            job = self._queue.get()
            try:
                if job is None:
                    break
                self._job_runner.run(job)
                jobs_done += 1
            finally:
                self._queue.task_done()
