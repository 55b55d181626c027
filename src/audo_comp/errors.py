"""Exception taxonomy for batch loudness processing."""

from __future__ import annotations

from pathlib import Path


class AudoCompError(Exception):
    """Base class for every error raised by Audo_Comp."""


class ValidationError(AudoCompError, ValueError):
    """Raised when a contract receives invalid input."""


class NotFoundError(AudoCompError, FileNotFoundError):
    """Raised when the batch root directory is missing."""


class ToolUnavailableError(AudoCompError):
    """Raised when the external transcoder cannot be located."""


class AnalysisError(AudoCompError):
    """Loudness measurement failed for a single file."""

    def __init__(self, file_path: Path, cause: str) -> None:
        super().__init__(f"Loudness analysis failed for {file_path}: {cause}")
        self.file_path = file_path
        self.cause = cause


class CompressionError(AudoCompError):
    """Dynamic-range compression failed for a single file."""

    def __init__(self, file_path: Path, exit_status: int | None, detail: str | None = None) -> None:
        message = f"Compression failed for {file_path}"
        if exit_status is not None:
            message += f" (exit status {exit_status})"
        if detail:
            message += f": {detail}"
        super().__init__(message)
        self.file_path = file_path
        self.exit_status = exit_status
        self.detail = detail


class PersistenceError(AudoCompError):
    """Raised when the metadata document cannot be written."""

    def __init__(self, path: Path, message: str) -> None:
        super().__init__(f"Could not persist metadata to {path}: {message}")
        self.path = path
