"""Analysis-related exceptions: file access, parsing, aborted scans."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Optional

from .base import TypescopeError

if TYPE_CHECKING:
    from ..analysis.models import ProjectOverview


class AnalysisError(TypescopeError):
    """Base class for analysis-related errors."""
    pass


class FileAccessError(AnalysisError):
    """Raised when a file cannot be accessed or read."""

    def __init__(self, filepath: Path, reason: str):
        super().__init__(
            f"Cannot access file: {filepath}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason


class ParsingError(AnalysisError):
    """Raised when file content cannot be parsed."""

    def __init__(self, filepath: Path, language: str, reason: str):
        super().__init__(
            f"Failed to parse {language} file: {filepath}",
            details={"filepath": str(filepath), "language": language, "reason": reason},
        )
        self.filepath = filepath
        self.language = language
        self.reason = reason


class ScanAbortedError(AnalysisError):
    """Raised once when a project scan stops at the first failing file.

    ``partial`` holds every file processed before the failure; the failing
    file and all files after it are absent.
    """

    def __init__(
        self,
        filepath: Path,
        cause: AnalysisError,
        partial: Optional[ProjectOverview] = None,
    ):
        super().__init__(
            f"Scan aborted at {filepath}",
            details={"filepath": str(filepath), "reason": getattr(cause, "reason", str(cause))},
        )
        self.filepath = filepath
        self.cause = cause
        self.partial = partial
