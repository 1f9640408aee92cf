"""
Modules file loading.
"""

from pathlib import Path

from .exceptions import JobListError


def parse_job_names(text: str) -> list[str]:
    """Split modules-file text into job names, one per non-blank line.

    Surrounding whitespace (including a trailing \\r) is stripped. Order and
    duplicates are preserved.
    """
    return [line.strip() for line in text.splitlines() if line.strip()]


def load_job_names(path: Path) -> list[str]:
    """Read the modules file.

    Raises:
        JobListError: If the file cannot be read or decoded
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise JobListError(path, str(e)) from e
    return parse_job_names(text)
