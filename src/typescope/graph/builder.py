"""Type dependency graph construction from a ProjectOverview."""

from ..analysis.models import ProjectOverview
from .models import TypeGraph


def build_type_graph(overview: ProjectOverview) -> TypeGraph:
    """Union, across all files, of (type name -> used types).

    Types declared under the same name in different files share one node
    and merge their edges.
    """
    edges: dict[str, set[str]] = {}
    declared: set[str] = set()

    for file_overview in overview.files.values():
        for name, info in file_overview.types.items():
            declared.add(name)
            targets = edges.setdefault(name, set())
            targets.update(info.used_types)

    all_nodes = set(declared)
    reverse_sets: dict[str, set[str]] = {}
    edge_count = 0
    for source, targets in edges.items():
        for target in targets:
            all_nodes.add(target)
            reverse_sets.setdefault(target, set()).add(source)
            edge_count += 1

    adjacency = {node: sorted(edges.get(node, ())) for node in sorted(all_nodes)}
    reverse = {node: sorted(reverse_sets.get(node, ())) for node in sorted(all_nodes)}

    return TypeGraph(
        adjacency=adjacency,
        reverse=reverse,
        all_nodes=all_nodes,
        declared=declared,
        edge_count=edge_count,
    )
