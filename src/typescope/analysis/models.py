"""Result models for a scan.

All results are immutable: the traversal writes into the builders in
``builder.py`` and finalizes them into these values. Relationships between
types are name strings, never object references.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from ..scanning.syntax import TypeKind


@dataclass(frozen=True)
class PropertyInformation:
    """A stored property with an explicit type annotation."""

    name: str
    type: str


@dataclass(frozen=True)
class FunctionInformation:
    """A function or initializer declared inside a type.

    Attributes:
        name: Identifier, or "init" for initializers
        return_type: Declared result type, "Void" when absent
        argument_types: Raw parameter type strings, positional
        used_types: Type tokens referenced by the signature and by type
            annotations inside the body
    """

    name: str
    return_type: str
    argument_types: tuple[str, ...] = ()
    used_types: frozenset[str] = frozenset()


@dataclass(frozen=True)
class TypeInformation:
    """A declared class, struct, enum or protocol."""

    kind: TypeKind
    functions: tuple[FunctionInformation, ...] = ()
    properties: tuple[PropertyInformation, ...] = ()
    used_types: frozenset[str] = frozenset()


@dataclass(frozen=True)
class FileOverview:
    """Types declared in one file, keyed by (unqualified) name."""

    types: Mapping[str, TypeInformation] = field(
        default_factory=lambda: MappingProxyType({})
    )


@dataclass(frozen=True)
class ProjectOverview:
    """Every analyzed file of a scan target plus the folders encountered."""

    files: Mapping[Path, FileOverview] = field(
        default_factory=lambda: MappingProxyType({})
    )
    folders: tuple[Path, ...] = ()

    @property
    def type_count(self) -> int:
        return sum(len(f.types) for f in self.files.values())
