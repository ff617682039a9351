"""
typescope - type and dependency overview for Swift projects.

Extracts declared types, their functions, initializers and stored
properties, and the types each of them references, from every Swift file
under a path.
"""

__version__ = "0.1.0"

from .analysis import (  # noqa: E402
    FileOverview,
    FunctionInformation,
    ProjectOverview,
    PropertyInformation,
    TypeInformation,
)
from .api import analyze  # noqa: E402
from .graph import TypeGraph, build_type_graph  # noqa: E402

__all__ = [
    "analyze",
    "ProjectOverview",
    "FileOverview",
    "TypeInformation",
    "FunctionInformation",
    "PropertyInformation",
    "TypeGraph",
    "build_type_graph",
]
