"""
Run Coordinator - wires registry, executor, dispatcher and monitor together.
"""

import logging
import sys
import time
from typing import Callable, Optional, TextIO

from .command import CommandRunner
from .config import BatchSettings
from .dispatcher import BoundedDispatcher
from .exceptions import OutputDirectoryError
from .executor import JobExecutor
from .joblist import load_job_names
from .models import BatchSummary
from .monitor import StatusMonitor
from .registry import RunningJobsRegistry

logger = logging.getLogger(__name__)


def run_batch(
    settings: BatchSettings,
    control: Optional[TextIO] = None,
    out: Optional[TextIO] = None,
    monitor: bool = True,
    runner: Optional[CommandRunner] = None,
    clock: Optional[Callable[[], float]] = None,
    registry: Optional[RunningJobsRegistry] = None,
) -> BatchSummary:
    """Run every module in the modules file and wait for all of them.

    Args:
        settings: Validated batch settings
        control: Stream whose lines trigger status reports (default: stdin)
        out: Console stream for status reports and the total line (default: stdout)
        monitor: Start the interactive status monitor
        runner: Command runner override (tests)
        clock: Monotonic time source
        registry: Registry override (tests)

    Returns:
        BatchSummary with one result per job

    Raises:
        OutputDirectoryError: If the output directory cannot be created
        JobListError: If the modules file cannot be read
    """
    out = out if out is not None else sys.stdout
    clock = clock or time.monotonic
    registry = registry if registry is not None else RunningJobsRegistry()

    output_dir = settings.output_path
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise OutputDirectoryError(output_dir, str(e)) from e

    names = load_job_names(settings.modules_file)
    limit = settings.effective_parallelism
    logger.info(f"Loaded {len(names)} module(s) from {settings.modules_file}")

    total_start = clock()

    if monitor:
        StatusMonitor(registry, control=control, out=out, clock=clock).start()

    executor = JobExecutor(
        tool_path=settings.tool_path,
        image_path=settings.image_path,
        output_dir=output_dir,
        registry=registry,
        runner=runner,
        clock=clock,
    )
    results = BoundedDispatcher(executor, limit).run_all(names)

    total = clock() - total_start
    out.write(f"All modules completed in {total:.2f} seconds.\n")
    out.flush()

    return BatchSummary(results=results, total_elapsed=total)
