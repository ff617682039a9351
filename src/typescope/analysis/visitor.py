"""Declaration visitor: one depth-first walk over a file's syntax tree.

Each node kind has one handler. A handler records what the node declares
against the current scope and then visits the node's children, so that the
scope it opened (a type or a function) is active for its whole subtree.
"""

from __future__ import annotations

from typing import Callable, Iterable, Optional

from ..logging_config import get_logger
from ..scanning.syntax import (
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
)
from .builder import FileOverviewBuilder, FunctionBuilder
from .classifier import (
    INITIALIZER_MARKER,
    VOID_MARKER,
    is_keyword_or_literal,
    is_valid_type_name,
)
from .models import FileOverview, PropertyInformation
from .scope import ScopeStack
from .tokenizer import extract_type_tokens

logger = get_logger(__name__)


class DeclarationVisitor:
    """Builds a FileOverview from one SourceTree.

    A visitor instance is single-use: ``visit`` walks the tree once and
    returns the finalized overview.
    """

    def __init__(self) -> None:
        self._file = FileOverviewBuilder()
        self._scope = ScopeStack(self._file)
        self._handlers: dict[NodeKind, Callable] = {
            NodeKind.TYPE_DECLARATION: self._visit_type,
            NodeKind.FUNCTION: self._visit_function,
            NodeKind.INITIALIZER: self._visit_initializer,
            NodeKind.PROPERTY: self._visit_property,
            NodeKind.INHERITANCE_CLAUSE: self._visit_inheritance,
            NodeKind.TYPE_ANNOTATION: self._visit_annotation,
            NodeKind.MEMBER_ACCESS: self._visit_member_access,
        }
        missing = set(NodeKind) - set(self._handlers)
        if missing:
            raise TypeError(f"No handler for node kinds: {sorted(k.value for k in missing)}")

    @property
    def scope(self) -> ScopeStack:
        return self._scope

    def visit(self, tree: SourceTree) -> FileOverview:
        self._walk_all(tree.nodes)
        return self._file.build()

    def _walk_all(self, nodes: Iterable[SyntaxNode]) -> None:
        for node in nodes:
            self._walk(node)

    def _walk(self, node: SyntaxNode) -> None:
        self._handlers[node.kind](node)

    # ── Declarations ──────────────────────────────────────────────

    def _visit_type(self, node: TypeDeclaration) -> None:
        if not node.name or is_keyword_or_literal(node.name):
            logger.debug(f"Skipping {node.type_kind.value} declaration without a usable name")
            self._walk_all(node.children)
            return

        self._scope.enter_type(node.name, node.type_kind)
        try:
            self._walk_all(node.children)
        finally:
            self._scope.exit_type()

    def _visit_function(self, node: FunctionDeclaration) -> None:
        declared = node.return_type.strip() if node.return_type else None
        self._visit_callable(node.name, declared, node.parameters, node.children)

    def _visit_initializer(self, node: InitializerDeclaration) -> None:
        self._visit_callable(INITIALIZER_MARKER, None, node.parameters, node.children)

    def _visit_callable(
        self,
        name: str,
        declared_return: Optional[str],
        parameters: list[Parameter],
        children: list[SyntaxNode],
    ) -> None:
        type_builder = self._scope.current_type()
        if type_builder is None:
            # Free functions are not recorded
            self._walk_all(children)
            return

        if declared_return is not None and is_valid_type_name(declared_return):
            type_builder.used_types.add(declared_return)

        argument_types: list[str] = []
        for param in parameters:
            if param.type is None:
                continue
            param_type = param.type.strip()
            if is_valid_type_name(param_type):
                type_builder.used_types.add(param_type)
            argument_types.append(param_type)

        function = FunctionBuilder(
            name=name,
            return_type=declared_return or VOID_MARKER,
            argument_types=argument_types,
        )
        type_builder.functions.append(function)

        self._scope.enter_function(function)
        try:
            self._walk_all(children)
        finally:
            self._scope.exit_function()

    def _visit_property(self, node: PropertyDeclaration) -> None:
        type_builder = self._scope.current_type()
        if type_builder is not None:
            for binding in node.bindings:
                if binding.type is None:
                    continue
                name = binding.name.strip()
                declared = binding.type.strip()
                if not is_keyword_or_literal(name) and is_valid_type_name(declared):
                    type_builder.properties.append(PropertyInformation(name=name, type=declared))
                    type_builder.used_types.add(declared)
        self._walk_all(node.children)

    # ── References ────────────────────────────────────────────────

    def _visit_inheritance(self, node: InheritanceClause) -> None:
        type_builder = self._scope.current_type()
        if type_builder is not None:
            for inherited in node.names:
                name = inherited.strip()
                # Reserved-word check only, no capitalization test
                if not is_keyword_or_literal(name):
                    type_builder.used_types.add(name)
        self._walk_all(node.children)

    def _visit_annotation(self, node: TypeAnnotation) -> None:
        type_builder = self._scope.current_type()
        if type_builder is not None:
            function: Optional[FunctionBuilder] = self._scope.current_function()
            for token in extract_type_tokens(node.text):
                if is_valid_type_name(token):
                    type_builder.used_types.add(token)
                    if function is not None:
                        function.used_types.add(token)
        self._walk_all(node.children)

    def _visit_member_access(self, node: MemberAccess) -> None:
        type_builder = self._scope.current_type()
        member = node.member.strip()
        if type_builder is not None and is_valid_type_name(member):
            type_builder.used_types.add(member)
        self._walk_all(node.children)


def analyze_source_tree(tree: SourceTree) -> FileOverview:
    """Run one DeclarationVisitor over a parsed file."""
    return DeclarationVisitor().visit(tree)
