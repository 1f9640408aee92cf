"""
Status Monitor Thread - prints in-flight modules on operator request.

Blocks reading the control stream (stdin by default). Every line read,
whatever its content, triggers one status report built from a registry
snapshot. Read-only: it never touches job execution.
"""

import logging
import sys
import threading
import time
from typing import Callable, Optional, TextIO

from .registry import RunningJobsRegistry

logger = logging.getLogger(__name__)

HEADER = "->->->->->->->->->-> Currently running modules <-<-<-<-<-<-<-<-<-<-"
FOOTER = "->->->->->->->->->->->->->->-> End <-<-<-<-<-<-<-<-<-<-<-<-<-<-<-"


def format_status(snapshot: dict[str, float], now: float) -> str:
    """Render a status report, oldest job first."""
    lines = ["", HEADER]
    for name, started_at in sorted(snapshot.items(), key=lambda item: item[1]):
        lines.append(f"Module: {name}, Runtime: {now - started_at:.2f} seconds")
    lines.append(FOOTER)
    lines.append("")
    return "\n".join(lines)


class StatusMonitor:
    """Background thread that reports running jobs each time a line is read."""

    def __init__(
        self,
        registry: RunningJobsRegistry,
        control: Optional[TextIO] = None,
        out: Optional[TextIO] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        """Initialize the monitor.

        Args:
            registry: Registry of in-flight jobs
            control: Stream whose lines trigger a report (default: stdin)
            out: Stream reports are written to (default: stdout)
            clock: Monotonic time source matching the one jobs record with
        """
        self.registry = registry
        self.control = control if control is not None else sys.stdin
        self.out = out if out is not None else sys.stdout
        self.clock = clock or time.monotonic

        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start the listener thread. It lives until EOF or process exit."""
        if self.running:
            logger.warning("Status monitor already running")
            return

        self._thread = threading.Thread(target=self._listen_loop, name="status-monitor", daemon=True)
        self._thread.start()
        logger.debug("Status monitor started")

    def join(self, timeout: Optional[float] = None) -> None:
        """Wait for the listener to exit (only happens at EOF)."""
        if self._thread:
            self._thread.join(timeout=timeout)

    def report(self) -> None:
        """Print the current status report."""
        # Snapshot before writing so the registry lock is never held during I/O.
        snapshot = self.registry.snapshot()
        text = format_status(snapshot, self.clock())
        self.out.write(text + "\n")
        self.out.flush()

    def _listen_loop(self) -> None:
        while True:
            try:
                line = self.control.readline()
            except (OSError, ValueError) as e:
                logger.debug(f"Control stream unavailable, status monitor exiting: {e}")
                return

            if not line:
                logger.debug("Control stream closed, status monitor exiting")
                return

            try:
                self.report()
            except Exception as e:
                logger.error(f"Status report error: {e}")
