"""Custom exceptions for vol-dispatch."""

from pathlib import Path


class DispatchError(Exception):
    """Base exception for vol-dispatch."""

    pass


class ConfigError(DispatchError):
    """Raised when required settings are missing or invalid."""

    pass


class FatalInputError(DispatchError):
    """Raised when batch input is unusable. Aborts before any job starts."""

    def __init__(self, path: Path, message: str):
        self.path = path
        super().__init__(message)


class JobListError(FatalInputError):
    """Raised when the modules file cannot be read."""

    def __init__(self, path: Path, reason: str):
        super().__init__(path, f"Error reading modules file {path}: {reason}")


class OutputDirectoryError(FatalInputError):
    """Raised when the output directory cannot be created."""

    def __init__(self, path: Path, reason: str):
        super().__init__(path, f"Error creating output directory {path}: {reason}")
