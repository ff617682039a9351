"""Tests for the declaration visitor on hand-built syntax trees."""

from pathlib import Path

from typescope.analysis.models import FunctionInformation, PropertyInformation
from typescope.analysis.visitor import DeclarationVisitor, analyze_source_tree
from typescope.scanning.syntax import (
    Binding,
    FunctionDeclaration,
    InheritanceClause,
    InitializerDeclaration,
    MemberAccess,
    NodeKind,
    Parameter,
    PropertyDeclaration,
    SourceTree,
    TypeAnnotation,
    TypeDeclaration,
    TypeKind,
)


def _tree(*nodes):
    return SourceTree(path=Path("Test.swift"), nodes=list(nodes))


def _property(name, type_text):
    return PropertyDeclaration(
        bindings=[Binding(name=name, type=type_text)],
        children=[TypeAnnotation(text=type_text)],
    )


class TestGenericClassWithInitializer:
    """A class with one generic property and one initializer."""

    def setup_method(self):
        holder = TypeDeclaration(
            name="Holder",
            type_kind=TypeKind.CLASS,
            children=[
                _property("values", "Dictionary<String, [Int]>"),
                InitializerDeclaration(
                    parameters=[
                        Parameter(name="name", type="String"),
                        Parameter(name="values", type="Dictionary<String, [Int]>"),
                    ],
                    children=[
                        TypeAnnotation(text="String"),
                        TypeAnnotation(text="Dictionary<String, [Int]>"),
                    ],
                ),
            ],
        )
        self.overview = analyze_source_tree(_tree(holder))

    def test_single_class(self):
        """One TypeInformation of kind class."""
        assert list(self.overview.types) == ["Holder"]
        assert self.overview.types["Holder"].kind is TypeKind.CLASS

    def test_initializer_information(self):
        """The initializer uses the init marker, Void, and positional argument types."""
        (init,) = self.overview.types["Holder"].functions
        assert init.name == "init"
        assert init.return_type == "Void"
        assert init.argument_types == ("String", "Dictionary<String, [Int]>")

    def test_initializer_used_types_come_from_annotations(self):
        """Annotation tokens inside the initializer are attributed to it."""
        (init,) = self.overview.types["Holder"].functions
        assert init.used_types == {"String", "Dictionary", "[Int]"}

    def test_property_recorded(self):
        """The generic property is recorded with its raw type."""
        assert self.overview.types["Holder"].properties == (
            PropertyInformation(name="values", type="Dictionary<String, [Int]>"),
        )

    def test_type_used_types(self):
        """Raw property/parameter types plus every valid token."""
        assert self.overview.types["Holder"].used_types == {
            "Dictionary<String, [Int]>",
            "Dictionary",
            "String",
            "[Int]",
        }


class TestProtocolWithClosureParameter:
    """A protocol function taking an array and an escaping closure."""

    def setup_method(self):
        protocol = TypeDeclaration(
            name="TrickyProtocol",
            type_kind=TypeKind.PROTOCOL,
            children=[
                FunctionDeclaration(
                    name="processItems",
                    parameters=[
                        Parameter(name="items", type="[Item]"),
                        Parameter(name="completion", type="@escaping (Result) -> Void"),
                    ],
                    children=[
                        TypeAnnotation(text="[Item]", children=[TypeAnnotation(text="Item")]),
                        TypeAnnotation(
                            text="@escaping (Result) -> Void",
                            children=[TypeAnnotation(text="Result")],
                        ),
                    ],
                )
            ],
        )
        self.info = analyze_source_tree(_tree(protocol)).types["TrickyProtocol"]

    def test_kind(self):
        assert self.info.kind is TypeKind.PROTOCOL

    def test_argument_types_preserve_raw_strings(self):
        """Both raw parameter strings are kept as written."""
        (fn,) = self.info.functions
        assert fn.argument_types == ("[Item]", "@escaping (Result) -> Void")
        assert fn.return_type == "Void"

    def test_function_used_types(self):
        """Element type and closure tokens are included, Void is not."""
        (fn,) = self.info.functions
        assert {"Item", "Result", "[Item]"} <= fn.used_types
        assert "Void" not in fn.used_types

    def test_type_used_types_exclude_void(self):
        """The type never records the void marker either."""
        assert "Void" not in self.info.used_types
        assert {"Item", "Result", "[Item]"} <= self.info.used_types


class TestNestedTypes:
    """Outer containing Inner."""

    def setup_method(self):
        outer = TypeDeclaration(
            name="Outer",
            type_kind=TypeKind.STRUCT,
            children=[
                _property("first", "Date"),
                TypeDeclaration(
                    name="Inner",
                    type_kind=TypeKind.ENUM,
                    children=[_property("nested", "Int")],
                ),
                _property("last", "String"),
            ],
        )
        self.overview = analyze_source_tree(_tree(outer))

    def test_two_independent_entries(self):
        """Both types are recorded in the same file."""
        assert set(self.overview.types) == {"Outer", "Inner"}
        assert self.overview.types["Inner"].kind is TypeKind.ENUM

    def test_inner_properties_do_not_leak(self):
        """Inner's property never appears on Outer."""
        outer_props = [p.name for p in self.overview.types["Outer"].properties]
        assert "nested" not in outer_props
        assert [p.name for p in self.overview.types["Inner"].properties] == ["nested"]

    def test_outer_regains_current_type(self):
        """A property after the nested declaration belongs to Outer."""
        outer_props = [p.name for p in self.overview.types["Outer"].properties]
        assert outer_props == ["first", "last"]
        assert self.overview.types["Outer"].used_types == {"Date", "String"}
        assert self.overview.types["Inner"].used_types == {"Int"}


class TestFlatNamespace:
    """Same-name declarations in one file overwrite each other."""

    def test_last_sibling_wins(self):
        """Two sibling types sharing a name: the later one is kept."""
        tree = _tree(
            TypeDeclaration(name="Model", type_kind=TypeKind.STRUCT, children=[_property("a", "A")]),
            TypeDeclaration(name="Model", type_kind=TypeKind.CLASS, children=[_property("b", "B")]),
        )
        overview = analyze_source_tree(tree)
        assert len(overview.types) == 1
        info = overview.types["Model"]
        assert info.kind is TypeKind.CLASS
        assert [p.name for p in info.properties] == ["b"]
        assert info.used_types == {"B"}

    def test_nested_same_name_collision(self):
        """A nested type reusing the outer name replaces it; outer members land in the replacement."""
        tree = _tree(
            TypeDeclaration(
                name="Node",
                type_kind=TypeKind.CLASS,
                children=[
                    _property("before", "A"),
                    TypeDeclaration(name="Node", type_kind=TypeKind.STRUCT, children=[_property("inner", "B")]),
                    _property("after", "C"),
                ],
            )
        )
        overview = analyze_source_tree(tree)
        info = overview.types["Node"]
        assert info.kind is TypeKind.STRUCT
        assert [p.name for p in info.properties] == ["inner", "after"]

    def test_type_count_matches_distinct_names(self):
        """|types| equals the number of distinct names."""
        tree = _tree(
            TypeDeclaration(name="A", type_kind=TypeKind.CLASS),
            TypeDeclaration(name="B", type_kind=TypeKind.STRUCT, children=[TypeDeclaration(name="A", type_kind=TypeKind.ENUM)]),
            TypeDeclaration(name="C", type_kind=TypeKind.PROTOCOL),
        )
        assert len(analyze_source_tree(tree).types) == 3


class TestSkippedDeclarations:
    """Malformed or out-of-scope declarations are skipped silently."""

    def test_unnamed_type_attaches_children_to_ancestor(self):
        """A type with a reserved name is skipped; its content goes to the enclosing type."""
        tree = _tree(
            TypeDeclaration(
                name="Outer",
                type_kind=TypeKind.CLASS,
                children=[
                    TypeDeclaration(name="self", type_kind=TypeKind.STRUCT, children=[_property("x", "Int")]),
                ],
            )
        )
        overview = analyze_source_tree(tree)
        assert set(overview.types) == {"Outer"}
        assert [p.name for p in overview.types["Outer"].properties] == ["x"]

    def test_empty_name_at_top_level_drops_content(self):
        """Without a valid ancestor nothing is recorded."""
        tree = _tree(TypeDeclaration(name="", type_kind=TypeKind.CLASS, children=[_property("x", "Int")]))
        assert analyze_source_tree(tree).types == {}

    def test_free_function_not_recorded(self):
        """Functions outside any type are ignored, annotations included."""
        tree = _tree(
            FunctionDeclaration(
                name="helper",
                parameters=[Parameter(name="value", type="Int")],
                children=[TypeAnnotation(text="Int")],
            )
        )
        assert analyze_source_tree(tree).types == {}

    def test_free_function_children_still_visited(self):
        """A type declared inside a free function is recorded."""
        tree = _tree(
            FunctionDeclaration(
                name="factory",
                children=[TypeDeclaration(name="Local", type_kind=TypeKind.STRUCT, children=[_property("x", "Int")])],
            )
        )
        overview = analyze_source_tree(tree)
        assert [p.name for p in overview.types["Local"].properties] == ["x"]


class TestFunctions:
    """Function declarations inside types."""

    def _analyze(self, *children):
        tree = _tree(TypeDeclaration(name="Service", type_kind=TypeKind.CLASS, children=list(children)))
        return analyze_source_tree(tree).types["Service"]

    def test_declared_return_type(self):
        """A valid declared result type is recorded on the type."""
        info = self._analyze(
            FunctionDeclaration(name="load", return_type="[User]", children=[TypeAnnotation(text="[User]")])
        )
        assert info.functions == (
            FunctionInformation(
                name="load", return_type="[User]", argument_types=(), used_types=frozenset({"[User]"})
            ),
        )
        assert "[User]" in info.used_types

    def test_lowercase_types_not_counted(self):
        """Invalid return/argument types are kept as strings but not counted."""
        info = self._analyze(
            FunctionDeclaration(
                name="body",
                parameters=[Parameter(name="x", type="inout value")],
                return_type="some View",
            )
        )
        (fn,) = info.functions
        assert fn.return_type == "some View"
        assert fn.argument_types == ("inout value",)
        assert info.used_types == set()

    def test_parameter_without_type_is_dropped(self):
        """Positional argument types skip parameters with no type text."""
        info = self._analyze(
            FunctionDeclaration(
                name="f",
                parameters=[Parameter(name="a", type="Int"), Parameter(name="b", type=None)],
            )
        )
        assert info.functions[0].argument_types == ("Int",)

    def test_functions_keep_declaration_order(self):
        """Functions are appended in visit order."""
        info = self._analyze(
            FunctionDeclaration(name="b"),
            InitializerDeclaration(),
            FunctionDeclaration(name="a"),
        )
        assert [fn.name for fn in info.functions] == ["b", "init", "a"]

    def test_function_slot_cleared_after_exit(self):
        """Annotations after a function body belong to the type only."""
        info = self._analyze(
            FunctionDeclaration(name="f", children=[TypeAnnotation(text="Inside")]),
            _property("p", "Outside"),
        )
        (fn,) = info.functions
        assert fn.used_types == {"Inside"}
        assert {"Inside", "Outside"} <= info.used_types

    def test_body_annotations_attributed_to_function(self):
        """Local typed bindings in a body count for the function and are recorded as properties."""
        info = self._analyze(
            FunctionDeclaration(name="run", children=[_property("cache", "Cache<Key>")]),
        )
        (fn,) = info.functions
        assert fn.used_types == {"Cache", "Key"}
        assert [p.name for p in info.properties] == ["cache"]


class TestProperties:
    """Property/binding declarations."""

    def _analyze(self, *bindings):
        tree = _tree(
            TypeDeclaration(
                name="Model",
                type_kind=TypeKind.STRUCT,
                children=[PropertyDeclaration(bindings=list(bindings))],
            )
        )
        return analyze_source_tree(tree).types["Model"]

    def test_untyped_binding_not_recorded(self):
        """No inference: bindings without annotation are skipped."""
        info = self._analyze(Binding(name="count"))
        assert info.properties == ()

    def test_reserved_name_skipped(self):
        """A binding named like a keyword is skipped."""
        info = self._analyze(Binding(name="self", type="Model"))
        assert info.properties == ()

    def test_invalid_type_skipped(self):
        """A lowercase type is not recorded."""
        info = self._analyze(Binding(name="x", type="someType"))
        assert info.properties == ()

    def test_multiple_bindings(self):
        """Each typed binding becomes a property, in order."""
        info = self._analyze(Binding(name="a", type="Int"), Binding(name="b"), Binding(name="c", type="[String]"))
        assert info.properties == (
            PropertyInformation(name="a", type="Int"),
            PropertyInformation(name="c", type="[String]"),
        )
        assert info.used_types == {"Int", "[String]"}


class TestReferences:
    """Inheritance clauses and member access."""

    def _analyze(self, *children):
        tree = _tree(TypeDeclaration(name="View", type_kind=TypeKind.CLASS, children=list(children)))
        return analyze_source_tree(tree).types["View"]

    def test_inheritance_names_recorded(self):
        """Supertypes and conformances go into used types."""
        info = self._analyze(InheritanceClause(names=["UIView", "Codable"]))
        assert info.used_types == {"UIView", "Codable"}

    def test_inheritance_uses_keyword_check_only(self):
        """Lowercase names pass; reserved words do not."""
        info = self._analyze(InheritanceClause(names=["lowercased", "nil"]))
        assert info.used_types == {"lowercased"}

    def test_inheritance_outside_type_ignored(self):
        """No current type, no record."""
        overview = analyze_source_tree(_tree(InheritanceClause(names=["Codable"])))
        assert overview.types == {}

    def test_capitalized_member_recorded(self):
        """A capitalized member name is treated as a type reference."""
        info = self._analyze(MemberAccess(member="Shared"))
        assert info.used_types == {"Shared"}

    def test_lowercase_member_ignored(self):
        """`UIColor.red`: the base is never classified, the member fails the check."""
        info = self._analyze(MemberAccess(member="red"))
        assert info.used_types == set()

    def test_member_access_children_visited(self):
        """A chain `a.Inner.value` records the inner capitalized member."""
        info = self._analyze(MemberAccess(member="value", children=[MemberAccess(member="Inner")]))
        assert info.used_types == {"Inner"}

    def test_member_access_not_attributed_to_function(self):
        """Member access only feeds the type's used types."""
        info = self._analyze(FunctionDeclaration(name="f", children=[MemberAccess(member="Config")]))
        assert info.functions[0].used_types == set()
        assert "Config" in info.used_types


class TestVisitorDispatch:
    """Dispatch over the closed node-kind set."""

    def test_every_variant_has_a_distinct_kind(self):
        """Each node class maps to exactly one NodeKind."""
        kinds = {
            TypeDeclaration.kind,
            FunctionDeclaration.kind,
            InitializerDeclaration.kind,
            PropertyDeclaration.kind,
            InheritanceClause.kind,
            TypeAnnotation.kind,
            MemberAccess.kind,
        }
        assert kinds == set(NodeKind)

    def test_scope_empty_after_visit(self):
        """Every enter_type is paired with an exit."""
        visitor = DeclarationVisitor()
        visitor.visit(
            _tree(TypeDeclaration(name="A", type_kind=TypeKind.CLASS, children=[TypeDeclaration(name="B", type_kind=TypeKind.CLASS)]))
        )
        assert visitor.scope.depth == 0
        assert visitor.scope.current_function() is None

    def test_idempotent(self):
        """Two runs over the same tree produce equal overviews."""
        tree = _tree(
            TypeDeclaration(
                name="A",
                type_kind=TypeKind.CLASS,
                children=[InheritanceClause(names=["B"]), _property("c", "Set<C>")],
            )
        )
        assert analyze_source_tree(tree) == analyze_source_tree(tree)


class TestVoidMarker:
    """Only the synthesized result marker is kept out of used types."""

    def _analyze(self, *children):
        tree = _tree(TypeDeclaration(name="Task", type_kind=TypeKind.CLASS, children=list(children)))
        return analyze_source_tree(tree).types["Task"]

    def test_synthesized_marker_not_recorded(self):
        """An initializer and a function without a result add nothing."""
        info = self._analyze(InitializerDeclaration(), FunctionDeclaration(name="run"))
        assert [fn.return_type for fn in info.functions] == ["Void", "Void"]
        assert info.used_types == set()

    def test_declared_void_return_recorded(self):
        """`-> Void` written out is a declared result type."""
        info = self._analyze(FunctionDeclaration(name="run", return_type="Void"))
        assert info.functions[0].return_type == "Void"
        assert info.used_types == {"Void"}

    def test_void_property_recorded(self):
        """`var done: Void` is an ordinary typed property."""
        info = self._analyze(_property("done", "Void"))
        assert info.properties == (PropertyInformation(name="done", type="Void"),)
        assert "Void" in info.used_types
