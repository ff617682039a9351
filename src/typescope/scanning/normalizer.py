"""Normalizer: converts tree-sitter Swift parse trees to SourceTree.

Only the node kinds in ``syntax.py`` are materialized. Every other
tree-sitter node is transparent: its relevant descendants are hoisted into
the nearest materialized ancestor, so the analysis core never sees grammar
details.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Callable, Optional

import tree_sitter

from ..exceptions import FileAccessError, ParsingError
from ..logging_config import get_logger
from .syntax import (
    Binding,
    FunctionDeclaration,
    InheritanceClause,
    InitializerDeclaration,
    MemberAccess,
    Parameter,
    PropertyDeclaration,
    SourceTree,
    SyntaxNode,
    TypeAnnotation,
    TypeDeclaration,
    TypeKind,
)
from .treesitter_parser import LANGUAGE_NAME, TreeSitterParser, first_error

logger = get_logger(__name__)

TYPE_NODE_TYPES = frozenset(
    {
        "user_type",
        "array_type",
        "dictionary_type",
        "optional_type",
        "tuple_type",
        "function_type",
        "metatype",
        "opaque_type",
        "existential_type",
        "protocol_composition_type",
    }
)

# Decorations that carry no dependency information
_OPAQUE_NODE_TYPES = frozenset(
    {"modifiers", "attribute", "type_modifiers", "parameter_modifiers", "comment", "multiline_comment"}
)

_DECLARATION_KINDS = {
    "class": TypeKind.CLASS,
    "struct": TypeKind.STRUCT,
    "enum": TypeKind.ENUM,
}

_BINDING_KEYWORDS = re.compile(r"^(?:async\s+)?(?:let|var)\s+")

# A closure that returns nothing; the result is not a type mention
_EMPTY_RESULTS = frozenset({"Void", "()"})


class SwiftNormalizer:
    """Converts one tree-sitter tree into the syntax contract."""

    def __init__(self, code: bytes):
        self._code = code
        self._converters: dict[str, Callable[[tree_sitter.Node], list[SyntaxNode]]] = {
            "class_declaration": self._class_declaration,
            "protocol_declaration": self._protocol_declaration,
            "function_declaration": self._function_declaration,
            "protocol_function_declaration": self._function_declaration,
            "init_declaration": self._init_declaration,
            "property_declaration": self._property_declaration,
            "protocol_property_declaration": self._property_declaration,
            "navigation_expression": self._navigation_expression,
        }

    def normalize(self, root: tree_sitter.Node) -> list[SyntaxNode]:
        return self._convert_children(root)

    # ── Generic walk ──────────────────────────────────────────────

    def _convert(self, node: tree_sitter.Node) -> list[SyntaxNode]:
        if node.type in _OPAQUE_NODE_TYPES:
            return []
        converter = self._converters.get(node.type)
        if converter is not None:
            return converter(node)
        if node.type in TYPE_NODE_TYPES:
            return [self._annotation(self._text(node), node)]
        return self._convert_children(node)

    def _convert_children(
        self, node: tree_sitter.Node, skip: Optional[Callable[[int, tree_sitter.Node], bool]] = None
    ) -> list[SyntaxNode]:
        result: list[SyntaxNode] = []
        for index, child in enumerate(node.children):
            if not child.is_named:
                continue
            if skip is not None and skip(index, child):
                continue
            result.extend(self._convert(child))
        return result

    # ── Type declarations ─────────────────────────────────────────

    def _class_declaration(self, node: tree_sitter.Node) -> list[SyntaxNode]:
        kind_node = node.child_by_field_name("declaration_kind")
        declaration_kind = kind_node.type if kind_node is not None else ""
        type_kind = _DECLARATION_KINDS.get(declaration_kind)
        if type_kind is None:
            # extension / actor: members belong to the enclosing scope
            return self._convert_children(node, skip=self._skip_declaration_header(node))
        return [self._type_declaration(node, type_kind)]

    def _protocol_declaration(self, node: tree_sitter.Node) -> list[SyntaxNode]:
        return [self._type_declaration(node, TypeKind.PROTOCOL)]

    def _type_declaration(self, node: tree_sitter.Node, type_kind: TypeKind) -> TypeDeclaration:
        name_node = node.child_by_field_name("name")
        name = self._text(name_node) if name_node is not None else ""

        children: list[SyntaxNode] = []
        inherited = [
            self._inherited_name(child) for child in node.named_children if child.type == "inheritance_specifier"
        ]
        if inherited:
            children.append(InheritanceClause(names=inherited))
        children.extend(self._convert_children(node, skip=self._skip_declaration_header(node)))
        return TypeDeclaration(name=name, type_kind=type_kind, children=children)

    def _skip_declaration_header(self, node: tree_sitter.Node) -> Callable[[int, tree_sitter.Node], bool]:
        def skip(index: int, child: tree_sitter.Node) -> bool:
            return (
                node.field_name_for_child(index) in ("name", "declaration_kind")
                or child.type == "inheritance_specifier"
            )

        return skip

    def _inherited_name(self, specifier: tree_sitter.Node) -> str:
        target = specifier.child_by_field_name("inherits_from")
        return self._text(target if target is not None else specifier)

    # ── Functions and initializers ────────────────────────────────

    def _function_declaration(self, node: tree_sitter.Node) -> list[SyntaxNode]:
        name_node = node.child_by_field_name("name")
        name = self._text(name_node) if name_node is not None else ""
        parameters, annotations = self._parameters(node)

        return_nodes = self._return_type_nodes(node)
        return_type: Optional[str] = None
        if return_nodes:
            return_type = self._slice(return_nodes[0].start_byte, return_nodes[-1].end_byte)
            annotations.append(self._annotation(return_type, self._last_type_node(return_nodes)))
        return_ids = {(n.start_byte, n.end_byte) for n in return_nodes}

        def skip(index: int, child: tree_sitter.Node) -> bool:
            return (
                child.type == "parameter"
                or node.field_name_for_child(index) == "name"
                or (child.start_byte, child.end_byte) in return_ids
            )

        children = annotations + self._convert_children(node, skip=skip)
        return [
            FunctionDeclaration(
                name=name, parameters=parameters, return_type=return_type, children=children
            )
        ]

    def _init_declaration(self, node: tree_sitter.Node) -> list[SyntaxNode]:
        parameters, annotations = self._parameters(node)
        children = annotations + self._convert_children(
            node, skip=lambda index, child: child.type == "parameter"
        )
        return [InitializerDeclaration(parameters=parameters, children=children)]

    def _parameters(self, node: tree_sitter.Node) -> tuple[list[Parameter], list[SyntaxNode]]:
        parameters: list[Parameter] = []
        annotations: list[SyntaxNode] = []
        for child in node.named_children:
            if child.type != "parameter":
                continue
            name_node = child.child_by_field_name("name")
            name = self._text(name_node) if name_node is not None else ""
            raw_type, type_node = self._declared_type(child)
            parameters.append(Parameter(name=name, type=raw_type))
            if raw_type:
                annotations.append(self._annotation(raw_type, type_node))
        return parameters, annotations

    def _return_type_nodes(self, node: tree_sitter.Node) -> list[tree_sitter.Node]:
        nodes = list(node.children_by_field_name("return_type"))
        if nodes:
            return nodes
        # Grammar versions without the field: the named node after "->"
        seen_arrow = False
        for child in node.children:
            if child.type == "->":
                seen_arrow = True
            elif seen_arrow and child.is_named:
                return [child] if child.type in TYPE_NODE_TYPES else []
        return []

    # ── Properties ────────────────────────────────────────────────

    def _property_declaration(self, node: tree_sitter.Node) -> list[SyntaxNode]:
        names: list[str] = []
        types: list[Optional[str]] = []
        children: list[SyntaxNode] = []

        for index, child in enumerate(node.children):
            if not child.is_named:
                continue
            if node.field_name_for_child(index) == "name" or child.type == "pattern":
                names.append(_BINDING_KEYWORDS.sub("", self._text(child)))
                types.append(None)
            elif child.type == "type_annotation":
                raw_type, type_node = self._declared_type(child)
                if types and types[-1] is None:
                    types[-1] = raw_type
                if raw_type:
                    children.append(self._annotation(raw_type, type_node))
            else:
                children.extend(self._convert(child))

        bindings = [Binding(name=name, type=declared) for name, declared in zip(names, types)]
        return [PropertyDeclaration(bindings=bindings, children=children)]

    # ── Expressions ───────────────────────────────────────────────

    def _navigation_expression(self, node: tree_sitter.Node) -> list[SyntaxNode]:
        suffix = node.child_by_field_name("suffix")
        member_node = suffix.child_by_field_name("suffix") if suffix is not None else None
        if member_node is None and suffix is not None and suffix.named_children:
            member_node = suffix.named_children[-1]
        member = self._text(member_node) if member_node is not None else ""

        target = node.child_by_field_name("target")
        children = self._convert(target) if target is not None else []
        return [MemberAccess(member=member, children=children)]

    # ── Type mentions ─────────────────────────────────────────────

    def _annotation(self, text: str, type_node: Optional[tree_sitter.Node]) -> TypeAnnotation:
        text = text.strip()
        children: list[SyntaxNode] = []
        if type_node is not None:
            node_text = self._text(type_node)
            if node_text != text and type_node.type != "function_type":
                # `inout Bar`, `@escaping Handler`: the bare type is its own mention
                children.append(self._annotation(node_text, type_node))
            else:
                for component in self._component_types(type_node):
                    children.append(self._annotation(self._text(component), component))
        return TypeAnnotation(text=text, children=children)

    def _declared_type(self, node: tree_sitter.Node) -> tuple[Optional[str], Optional[tree_sitter.Node]]:
        """Raw type text after the ':' of a parameter or type annotation."""
        colon_end: Optional[int] = None
        for child in node.children:
            if child.type == ":":
                colon_end = child.end_byte
                break
        if colon_end is None:
            return None, None

        type_nodes = [c for c in node.named_children if c.start_byte >= colon_end]
        raw = self._slice(colon_end, node.end_byte)
        return (raw or None), self._last_type_node(type_nodes)

    @staticmethod
    def _last_type_node(nodes: list[tree_sitter.Node]) -> Optional[tree_sitter.Node]:
        for candidate in reversed(nodes):
            if candidate.type in TYPE_NODE_TYPES:
                return candidate
        return None

    def _component_types(self, node: tree_sitter.Node) -> list[tree_sitter.Node]:
        """Structural component types of a type node.

        Generic arguments of a user type are left to the tokenizer. A function
        type contributes its parameter types and result, never the parameter
        tuple itself, and an empty result (`Void`, `()`) is not a component.
        """
        if node.type == "user_type":
            return []
        empty_result: Optional[tree_sitter.Node] = None
        if node.type == "function_type":
            typed = [c for c in node.named_children if c.type in TYPE_NODE_TYPES]
            if len(typed) > 1 and self._text(typed[-1]) in _EMPTY_RESULTS:
                empty_result = typed[-1]

        components: list[tree_sitter.Node] = []
        for child in node.named_children:
            if child.type in _OPAQUE_NODE_TYPES or child == empty_result:
                continue
            if child.type in TYPE_NODE_TYPES:
                if node.type == "function_type" and child.type == "tuple_type":
                    components.extend(self._component_types(child))
                else:
                    components.append(child)
            else:
                # Wrappers such as tuple_type_item
                components.extend(self._component_types(child))
        return components

    def _text(self, node: tree_sitter.Node) -> str:
        return self._slice(node.start_byte, node.end_byte)

    def _slice(self, start: int, end: int) -> str:
        return self._code[start:end].decode("utf-8", errors="replace").strip()


class SwiftParser:
    """Parses Swift files into SourceTree instances.

    Args:
        strict: Treat a tree containing ERROR/MISSING nodes as a parse failure
    """

    def __init__(self, strict: bool = True):
        self.strict = strict
        self._parser = TreeSitterParser()

    def parse_file(self, path: Path) -> SourceTree:
        """Read and parse one file.

        Raises:
            FileAccessError: If the file cannot be read
            ParsingError: If the file is not valid UTF-8, or (strict) has syntax errors
        """
        try:
            code = path.read_bytes()
        except OSError as e:
            raise FileAccessError(path, str(e)) from e
        return self.parse_bytes(code, path)

    def parse_source(self, source: str, path: Path = Path("<memory>.swift")) -> SourceTree:
        return self.parse_bytes(source.encode("utf-8"), path)

    def parse_bytes(self, code: bytes, path: Path) -> SourceTree:
        try:
            code.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ParsingError(path, LANGUAGE_NAME, f"not valid UTF-8: {e}") from e

        tree = self._parser.parse(code)
        root = tree.root_node
        if self.strict and root.has_error:
            error = first_error(root)
            line, column = error.start_point if error is not None else (0, 0)
            raise ParsingError(path, LANGUAGE_NAME, f"syntax error at line {line + 1}, column {column + 1}")

        try:
            nodes = SwiftNormalizer(code).normalize(root)
        except RecursionError as e:
            raise ParsingError(path, LANGUAGE_NAME, "nesting too deep to analyze") from e
        logger.debug(f"Normalized {path}: {len(nodes)} top-level nodes")
        return SourceTree(path=path, nodes=nodes)
