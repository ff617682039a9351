"""Type dependency graph model."""

from dataclasses import dataclass, field


@dataclass
class TypeGraph:
    """Directed graph of type dependencies.

    Edges are directed: adjacency[A] contains B means type A uses B (as a
    supertype, conformance, member type or signature type). Nodes include
    referenced names that are not declared anywhere in the project.
    """

    adjacency: dict[str, list[str]] = field(default_factory=dict)
    reverse: dict[str, list[str]] = field(default_factory=dict)
    all_nodes: set[str] = field(default_factory=set)
    declared: set[str] = field(default_factory=set)
    edge_count: int = 0

    @property
    def external_nodes(self) -> set[str]:
        """Referenced names with no declaration in the scanned files."""
        return self.all_nodes - self.declared
