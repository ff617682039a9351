"""Structured report: plain, deterministically ordered data for a ProjectOverview.

The report is the serialization and test-fixture format. Files, type names
and used-type lists are sorted; functions and properties keep declaration
order, so two scans of an unchanged tree produce identical reports.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from ..analysis.models import FileOverview, FunctionInformation, ProjectOverview, TypeInformation


def file_identifier(path: Path, root: Optional[Path] = None) -> str:
    """Path as shown in reports: relative to ``root`` when it lies under it."""
    if root is not None:
        try:
            return path.relative_to(root).as_posix() or path.name
        except ValueError:
            pass
    return path.as_posix()


def function_to_dict(fn: FunctionInformation) -> dict[str, Any]:
    return {
        "name": fn.name,
        "return_type": fn.return_type,
        "argument_types": list(fn.argument_types),
        "used_types": sorted(fn.used_types),
    }


def type_to_dict(info: TypeInformation) -> dict[str, Any]:
    return {
        "kind": info.kind.value,
        "functions": [function_to_dict(fn) for fn in info.functions],
        "properties": [{"name": p.name, "type": p.type} for p in info.properties],
        "used_types": sorted(info.used_types),
    }


def file_to_dict(overview: FileOverview) -> dict[str, Any]:
    return {"types": {name: type_to_dict(overview.types[name]) for name in sorted(overview.types)}}


def to_report(overview: ProjectOverview, root: Optional[Path] = None) -> dict[str, Any]:
    """Build the structured report for a whole project.

    Args:
        overview: Scan result
        root: Scan root; file and folder identifiers are made relative to it

    Returns:
        {"files": {file: {"types": {...}}}, "folders": [...]}
    """
    files = {file_identifier(path, root): file_to_dict(fo) for path, fo in overview.files.items()}
    return {
        "files": {key: files[key] for key in sorted(files)},
        "folders": [file_identifier(folder, root) for folder in overview.folders],
    }
