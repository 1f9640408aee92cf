"""
Bounded Dispatcher - runs every job with at most N executing at once.

One worker thread per job. A token is taken from a bounded semaphore before
each thread starts and is given back when that job's executor returns, so the
limit is a hard cap regardless of how many CPUs the machine has.
"""

import logging
import threading
from typing import Optional

from .executor import JobExecutor
from .models import JobResult, JobStatus

logger = logging.getLogger(__name__)


class BoundedDispatcher:
    """Admits jobs in list order, never more than `limit` in flight."""

    def __init__(self, executor: JobExecutor, limit: int):
        if limit < 1:
            raise ValueError(f"Concurrency limit must be at least 1, got {limit}")
        self.executor = executor
        self.limit = limit
        self._tokens = threading.BoundedSemaphore(limit)

    def run_all(self, names: list[str]) -> list[JobResult]:
        """Run every job and wait for all of them to terminate.

        Args:
            names: Module names in admission order

        Returns:
            One JobResult per name, in the same order as names
        """
        results: list[Optional[JobResult]] = [None] * len(names)
        threads: list[threading.Thread] = []
        logger.info(f"Using up to {self.limit} workers")

        for index, name in enumerate(names):
            self._tokens.acquire()
            thread = threading.Thread(
                target=self._worker,
                args=(index, name, results),
                name=f"job-{index}-{name}",
            )
            try:
                thread.start()
            except RuntimeError:
                self._tokens.release()
                raise
            threads.append(thread)

        for thread in threads:
            thread.join()

        return results  # type: ignore[return-value]

    def _worker(self, index: int, name: str, results: list[Optional[JobResult]]) -> None:
        try:
            results[index] = self.executor.execute(name)
        except Exception as e:
            logger.exception(f"Unexpected error in module {name}")
            results[index] = JobResult(
                name=name,
                output_path=self.executor.job_for(name).output_path,
                status=JobStatus.FAILED,
                error=f"unhandled error: {e}",
            )
        finally:
            self._tokens.release()
