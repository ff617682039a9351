"""Syntax contract between the Swift parser adapter and the analysis core.

A parsed file is a SourceTree of nodes drawn from a closed set of variants,
one per declaration kind the extraction engine understands:

    TypeDeclaration         class / struct / enum / protocol
    FunctionDeclaration     func, with raw parameter and return type text
    InitializerDeclaration  init, with raw parameter type text
    PropertyDeclaration     let/var bindings with optional type annotations
    InheritanceClause       supertype / conformance names of a declaration
    TypeAnnotation          one explicit type mention (raw text)
    MemberAccess            dotted reference ``base.member``

Every node keeps its relevant descendants in ``children``, in source order.
Nodes the engine has no rule for never appear: the adapter hoists their
relevant descendants into the nearest materialized ancestor.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import ClassVar, Optional, Union


class NodeKind(Enum):
    """Declaration kinds consumed by the extraction engine."""

    TYPE_DECLARATION = "type_declaration"
    FUNCTION = "function"
    INITIALIZER = "initializer"
    PROPERTY = "property"
    INHERITANCE_CLAUSE = "inheritance_clause"
    TYPE_ANNOTATION = "type_annotation"
    MEMBER_ACCESS = "member_access"


class TypeKind(str, Enum):
    """Discriminant of a type declaration."""

    CLASS = "class"
    STRUCT = "struct"
    ENUM = "enum"
    PROTOCOL = "protocol"


@dataclass(frozen=True)
class Parameter:
    """One parameter of a function or initializer.

    Attributes:
        name: Internal parameter name ("" when not recoverable)
        type: Raw type text as written, e.g. "@escaping (Result) -> Void"
    """

    name: str
    type: Optional[str]


@dataclass(frozen=True)
class Binding:
    """One pattern bound by a let/var declaration.

    Attributes:
        name: Pattern text, e.g. "count" or "(a, b)"
        type: Raw annotated type, None when the binding has no annotation
    """

    name: str
    type: Optional[str] = None


@dataclass
class TypeDeclaration:
    kind: ClassVar[NodeKind] = NodeKind.TYPE_DECLARATION

    name: str
    type_kind: TypeKind
    children: list[SyntaxNode] = field(default_factory=list)


@dataclass
class FunctionDeclaration:
    kind: ClassVar[NodeKind] = NodeKind.FUNCTION

    name: str
    parameters: list[Parameter] = field(default_factory=list)
    return_type: Optional[str] = None
    children: list[SyntaxNode] = field(default_factory=list)


@dataclass
class InitializerDeclaration:
    kind: ClassVar[NodeKind] = NodeKind.INITIALIZER

    parameters: list[Parameter] = field(default_factory=list)
    children: list[SyntaxNode] = field(default_factory=list)


@dataclass
class PropertyDeclaration:
    kind: ClassVar[NodeKind] = NodeKind.PROPERTY

    bindings: list[Binding] = field(default_factory=list)
    children: list[SyntaxNode] = field(default_factory=list)


@dataclass
class InheritanceClause:
    kind: ClassVar[NodeKind] = NodeKind.INHERITANCE_CLAUSE

    names: list[str] = field(default_factory=list)
    children: list[SyntaxNode] = field(default_factory=list)


@dataclass
class TypeAnnotation:
    """An explicit type mention.

    ``children`` holds the structural component types (array element,
    dictionary key and value, tuple elements, closure parameters and result).
    """

    kind: ClassVar[NodeKind] = NodeKind.TYPE_ANNOTATION

    text: str
    children: list[SyntaxNode] = field(default_factory=list)


@dataclass
class MemberAccess:
    kind: ClassVar[NodeKind] = NodeKind.MEMBER_ACCESS

    member: str
    children: list[SyntaxNode] = field(default_factory=list)


SyntaxNode = Union[
    TypeDeclaration,
    FunctionDeclaration,
    InitializerDeclaration,
    PropertyDeclaration,
    InheritanceClause,
    TypeAnnotation,
    MemberAccess,
]


@dataclass
class SourceTree:
    """Top-level nodes of one parsed source file."""

    path: Path
    nodes: list[SyntaxNode] = field(default_factory=list)
