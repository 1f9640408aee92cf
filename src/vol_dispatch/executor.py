"""
Job Executor - runs a single Volatility module against the memory image.

Opens the module's output file, registers the job as running, invokes the
tool with stdout redirected into the file and waits for it to exit. Failures
are reported in the returned JobResult and never raised, so one bad module
cannot take down its siblings.
"""

import logging
import time
from pathlib import Path
from typing import BinaryIO, Callable, Optional

from .command import CommandRunner, run_command
from .models import Job, JobResult, JobStatus, output_path_for
from .registry import RunningJobsRegistry

logger = logging.getLogger(__name__)


class JobExecutor:
    """Executes jobs by spawning the analysis tool once per module."""

    def __init__(
        self,
        tool_path: str,
        image_path: str,
        output_dir: Path,
        registry: RunningJobsRegistry,
        runner: Optional[CommandRunner] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        """Initialize executor.

        Args:
            tool_path: Path to the analysis tool executable
            image_path: Path to the memory image passed to every job
            output_dir: Directory receiving one CSV file per job
            registry: Registry of in-flight jobs
            runner: Command runner (defaults to a real subprocess)
            clock: Monotonic time source in seconds
        """
        self.tool_path = tool_path
        self.image_path = image_path
        self.output_dir = Path(output_dir)
        self.registry = registry
        self.runner = runner or run_command
        self.clock = clock or time.monotonic

    def job_for(self, name: str) -> Job:
        """Build the Job for a module name."""
        return Job(name=name, output_path=output_path_for(self.output_dir, Path(self.image_path), name))

    def build_command(self, name: str) -> list[str]:
        """Build the tool command line for a module."""
        return [self.tool_path, "-f", self.image_path, "-r", "csv", name]

    def execute(self, name: str) -> JobResult:
        """Run one module to completion.

        Returns:
            JobResult with SUCCEEDED or FAILED status
        """
        job = self.job_for(name)

        try:
            sink = open(job.output_path, "wb")
        except OSError as e:
            logger.error(f"Error creating output file for module {name}: {e}")
            return JobResult(
                name=name,
                output_path=job.output_path,
                status=JobStatus.FAILED,
                error=f"cannot create output file: {e}",
            )

        with sink:
            start = self.clock()
            self.registry.record(name, start)
            try:
                return self._run(job, sink, start)
            finally:
                self.registry.forget(name)

    def _run(self, job: Job, sink: BinaryIO, start: float) -> JobResult:
        cmd = self.build_command(job.name)
        logger.info(f"Running module: {job.name}")
        logger.debug(f"Executing: {' '.join(cmd)} > {job.output_path}")

        try:
            return_code = self.runner(cmd, sink)
        except OSError as e:
            logger.error(f"!--- Error running module {job.name}: {e}")
            return JobResult(
                name=job.name,
                output_path=job.output_path,
                status=JobStatus.FAILED,
                error=str(e),
            )

        if return_code != 0:
            logger.error(f"!--- Error running module {job.name}: exit status {return_code}")
            return JobResult(
                name=job.name,
                output_path=job.output_path,
                status=JobStatus.FAILED,
                error=f"exit status {return_code}",
                return_code=return_code,
            )

        elapsed = self.clock() - start
        logger.info(f"    Module {job.name} completed in {elapsed:.2f} seconds")
        return JobResult(
            name=job.name,
            output_path=job.output_path,
            status=JobStatus.SUCCEEDED,
            return_code=return_code,
            elapsed=elapsed,
        )
