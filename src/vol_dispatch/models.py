"""
Job and batch data types.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional


class JobStatus(str, Enum):
    """Terminal outcome of a job."""

    SUCCEEDED = "succeeded"
    FAILED = "failed"


def output_path_for(output_dir: Path, image_path: Path, name: str) -> Path:
    """Output file for a module: {output_dir}/{image basename}_{name}.csv"""
    return Path(output_dir) / f"{Path(image_path).name}_{name}.csv"


@dataclass(frozen=True)
class Job:
    """One module invocation against the memory image."""

    name: str
    output_path: Path


@dataclass
class JobResult:
    """Outcome of running a single job."""

    name: str
    output_path: Path
    status: JobStatus
    error: Optional[str] = None
    return_code: Optional[int] = None
    elapsed: Optional[float] = None

    @property
    def succeeded(self) -> bool:
        return self.status == JobStatus.SUCCEEDED


@dataclass
class BatchSummary:
    """Results of a whole batch, in modules-file order."""

    results: list[JobResult] = field(default_factory=list)
    total_elapsed: float = 0.0

    @property
    def succeeded(self) -> list[JobResult]:
        return [r for r in self.results if r.succeeded]

    @property
    def failed(self) -> list[JobResult]:
        return [r for r in self.results if not r.succeeded]
