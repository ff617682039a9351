"""Project scanner: one declaration-visitor run per discovered file.

Failure is fail-fast and partial. The first file that cannot be read or
parsed stops the scan; files processed before it stay in the result, and a
single ScanAbortedError carrying that partial result is raised.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable, Optional

from ..config import AnalysisConfig, default_config
from ..exceptions import AnalysisError, InvalidPathError, ParsingError, ScanAbortedError
from ..logging_config import get_logger
from ..scanning.discovery import DirectoryEntry, iter_entries
from ..scanning.normalizer import SwiftParser
from ..scanning.treesitter_parser import LANGUAGE_NAME
from ..scanning.syntax import SourceTree
from .builder import ProjectOverviewBuilder
from .models import FileOverview, ProjectOverview
from .visitor import analyze_source_tree

logger = get_logger(__name__)

ParseFn = Callable[[Path], SourceTree]
DiscoverFn = Callable[[Path, AnalysisConfig], Iterable[DirectoryEntry]]


class ProjectScanner:
    """Scans a file or directory into a ProjectOverview.

    Args:
        config: Analysis configuration
        parse: Turns a file path into a SourceTree. Defaults to the
            tree-sitter Swift parser.
        discover: Enumerates directory entries under a root. Defaults to
            ``iter_entries``.
    """

    def __init__(
        self,
        config: Optional[AnalysisConfig] = None,
        parse: Optional[ParseFn] = None,
        discover: Optional[DiscoverFn] = None,
    ):
        self.config = config or default_config
        if parse is None:
            parse = SwiftParser(strict=self.config.strict_parsing).parse_file
        self._parse = parse
        self._discover = discover or iter_entries

    def scan(self, target: Path) -> ProjectOverview:
        """Scan a single source file or a directory tree.

        Raises:
            InvalidPathError: If the target does not exist
            ScanAbortedError: On the first file that fails to read or parse
        """
        target = Path(target)
        if not target.exists():
            raise InvalidPathError(target, "path does not exist")

        project = ProjectOverviewBuilder()

        if target.is_file():
            self._scan_file(target, project)
        else:
            for entry in self._discover(target, self.config):
                if entry.is_dir:
                    project.add_folder(entry.path)
                else:
                    self._scan_file(entry.path, project)

        overview = project.build()
        logger.info(
            f"Scan complete: {len(overview.files)} files, {len(overview.folders)} folders, "
            f"{overview.type_count} types"
        )
        return overview

    def _scan_file(self, path: Path, project: ProjectOverviewBuilder) -> None:
        try:
            overview = self.analyze_file(path)
        except AnalysisError as e:
            logger.error(f"Aborting scan: {e}")
            raise ScanAbortedError(path, e, partial=project.build()) from e
        project.add_file(path, overview)
        logger.debug(f"Analyzed: {path} ({len(overview.types)} types)")

    def analyze_file(self, path: Path) -> FileOverview:
        """Parse one file and run the declaration visitor over it."""
        tree = self._parse(path)
        try:
            return analyze_source_tree(tree)
        except RecursionError as e:
            raise ParsingError(path, LANGUAGE_NAME, "nesting too deep to analyze") from e
