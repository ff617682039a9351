"""Exception hierarchy for typescope."""

from .analysis import (
    AnalysisError,
    FileAccessError,
    ParsingError,
    ScanAbortedError,
)
from .base import TypescopeError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    InvalidPathError,
)

__all__ = [
    "TypescopeError",
    "AnalysisError",
    "FileAccessError",
    "ParsingError",
    "ScanAbortedError",
    "ConfigurationError",
    "InvalidPathError",
    "InvalidConfigError",
]
