"""
Running Jobs Registry - tracks which modules are currently executing.

Thread-safe mapping of module name to the monotonic time it started. Written
by every job worker, read by the status monitor.
"""

import threading


class RunningJobsRegistry:
    """Thread-safe registry of in-flight jobs and their start times.

    Duplicate module names share one key: a later start overwrites the
    earlier timestamp, and whichever finishes first removes the entry.
    """

    def __init__(self):
        self._started: dict[str, float] = {}
        self._lock = threading.Lock()

    def record(self, name: str, started_at: float) -> None:
        """Insert or overwrite the start time for a job."""
        with self._lock:
            self._started[name] = started_at

    def forget(self, name: str) -> None:
        """Remove a job from the registry. No-op if it is not present."""
        with self._lock:
            self._started.pop(name, None)

    def snapshot(self) -> dict[str, float]:
        """Get a point-in-time copy of all in-flight jobs."""
        with self._lock:
            return dict(self._started)

    def count(self) -> int:
        """Get number of in-flight jobs."""
        with self._lock:
            return len(self._started)
