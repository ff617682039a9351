"""Mutable builders owned by a traversal, finalized into result models."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

from ..scanning.syntax import TypeKind
from .models import (
    FileOverview,
    FunctionInformation,
    ProjectOverview,
    PropertyInformation,
    TypeInformation,
)


@dataclass
class FunctionBuilder:
    name: str
    return_type: str
    argument_types: list[str] = field(default_factory=list)
    used_types: set[str] = field(default_factory=set)

    def build(self) -> FunctionInformation:
        return FunctionInformation(
            name=self.name,
            return_type=self.return_type,
            argument_types=tuple(self.argument_types),
            used_types=frozenset(self.used_types),
        )


@dataclass
class TypeBuilder:
    kind: TypeKind
    functions: list[FunctionBuilder] = field(default_factory=list)
    properties: list[PropertyInformation] = field(default_factory=list)
    used_types: set[str] = field(default_factory=set)

    def build(self) -> TypeInformation:
        return TypeInformation(
            kind=self.kind,
            functions=tuple(fn.build() for fn in self.functions),
            properties=tuple(self.properties),
            used_types=frozenset(self.used_types),
        )


@dataclass
class FileOverviewBuilder:
    types: dict[str, TypeBuilder] = field(default_factory=dict)

    def declare_type(self, name: str, kind: TypeKind) -> TypeBuilder:
        """Create the entry for ``name``, replacing any earlier declaration."""
        builder = TypeBuilder(kind=kind)
        self.types[name] = builder
        return builder

    def build(self) -> FileOverview:
        return FileOverview(
            types=MappingProxyType({name: t.build() for name, t in self.types.items()})
        )


@dataclass
class ProjectOverviewBuilder:
    files: dict[Path, FileOverview] = field(default_factory=dict)
    folders: list[Path] = field(default_factory=list)

    def add_file(self, path: Path, overview: FileOverview) -> None:
        self.files[path] = overview

    def add_folder(self, path: Path) -> None:
        self.folders.append(path)

    def build(self) -> ProjectOverview:
        return ProjectOverview(
            files=MappingProxyType(dict(self.files)),
            folders=tuple(self.folders),
        )
