"""Public API for typescope.

Example:
    >>> from typescope import analyze
    >>> overview = analyze("Sources/")
    >>> sorted(overview.files)[0]
    PosixPath('Sources/App/Model.swift')
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from .analysis import ProjectOverview, ProjectScanner
from .config import load_config
from .logging_config import get_logger

logger = get_logger(__name__)


def analyze(
    path: Union[str, Path] = ".",
    config_file: Optional[Path] = None,
    **overrides,
) -> ProjectOverview:
    """Scan a Swift file or directory and return its ProjectOverview.

    Args:
        path: File or directory to scan (default: current directory)
        config_file: Optional explicit config file path
        **overrides: Configuration overrides (e.g. strict_parsing=False)

    Returns:
        The completed ProjectOverview

    Raises:
        ConfigurationError: If configuration is invalid
        InvalidPathError: If the path does not exist
        ScanAbortedError: If a file fails to parse; ``partial`` holds the
            files analyzed before it
    """
    config = load_config(config_file=config_file, **overrides)
    logger.debug(f"Scanning {path}")
    return ProjectScanner(config).scan(Path(path))
