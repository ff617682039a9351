"""Swift source discovery and parsing."""

from .discovery import DirectoryEntry, iter_entries
from .normalizer import SwiftNormalizer, SwiftParser
from .syntax import (
    Binding,
    FunctionDeclaration,
    InheritanceClause,
    InitializerDeclaration,
    MemberAccess,
    NodeKind,
    Parameter,
    PropertyDeclaration,
    SourceTree,
    SyntaxNode,
    TypeAnnotation,
    TypeDeclaration,
    TypeKind,
)
from .treesitter_parser import TreeSitterParser

__all__ = [
    # Discovery
    "DirectoryEntry",
    "iter_entries",
    # Syntax contract
    "NodeKind",
    "TypeKind",
    "Parameter",
    "Binding",
    "TypeDeclaration",
    "FunctionDeclaration",
    "InitializerDeclaration",
    "PropertyDeclaration",
    "InheritanceClause",
    "TypeAnnotation",
    "MemberAccess",
    "SyntaxNode",
    "SourceTree",
    # Parsers
    "TreeSitterParser",
    "SwiftNormalizer",
    "SwiftParser",
]
