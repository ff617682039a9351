"""Symbol and dependency extraction engine."""

from .classifier import (
    INITIALIZER_MARKER,
    RESERVED_WORDS,
    VOID_MARKER,
    is_keyword_or_literal,
    is_valid_type_name,
)
from .models import (
    FileOverview,
    FunctionInformation,
    ProjectOverview,
    PropertyInformation,
    TypeInformation,
)
from .scanner import ProjectScanner
from .scope import ScopeStack
from .tokenizer import extract_type_tokens
from .visitor import DeclarationVisitor, analyze_source_tree

__all__ = [
    # Classification
    "RESERVED_WORDS",
    "VOID_MARKER",
    "INITIALIZER_MARKER",
    "is_keyword_or_literal",
    "is_valid_type_name",
    "extract_type_tokens",
    # Models
    "ProjectOverview",
    "FileOverview",
    "TypeInformation",
    "FunctionInformation",
    "PropertyInformation",
    # Engine
    "ScopeStack",
    "DeclarationVisitor",
    "analyze_source_tree",
    "ProjectScanner",
]
