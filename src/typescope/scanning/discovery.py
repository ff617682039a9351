"""File discovery: enumerate source files and folders under a scan root."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional

from ..config import AnalysisConfig, default_config
from ..logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class DirectoryEntry:
    path: Path
    is_dir: bool


def iter_entries(root: Path, config: Optional[AnalysisConfig] = None) -> Iterator[DirectoryEntry]:
    """Walk ``root`` top-down, yielding directories and matching source files.

    Entries are sorted by name at every level so that two walks over an
    unchanged tree yield the same sequence. Directories are yielded before
    their contents. Files are filtered to the configured extensions;
    directories are yielded whether or not they contain source files.

    Args:
        root: Directory to walk (not itself yielded)
        config: Discovery settings (skip_dirs, hidden files, symlinks)
    """
    config = config or default_config
    extensions = config.extension_set
    skip_dirs = set(config.skip_dirs)

    # Track visited directories to break symlink loops
    visited: set[tuple[int, int]] = set()

    def walk(directory: Path) -> Iterator[DirectoryEntry]:
        try:
            stat = directory.stat()
        except OSError as e:
            logger.warning(f"Cannot stat {directory}: {e}")
            return
        key = (stat.st_dev, stat.st_ino)
        if key in visited:
            logger.debug(f"Skipping already visited directory: {directory}")
            return
        visited.add(key)

        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            logger.warning(f"Cannot list {directory}: {e}")
            return

        for entry in entries:
            if not config.allow_hidden_files and entry.name.startswith("."):
                continue
            path = Path(entry.path)
            try:
                is_dir = entry.is_dir(follow_symlinks=config.follow_symlinks)
            except OSError:
                continue
            if is_dir:
                if entry.name in skip_dirs:
                    logger.debug(f"Skipped (dir): {path}")
                    continue
                yield DirectoryEntry(path=path, is_dir=True)
                yield from walk(path)
            elif path.suffix in extensions:
                yield DirectoryEntry(path=path, is_dir=False)

    yield from walk(root)
