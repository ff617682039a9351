"""Dependency graph formatter: one table row per type."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from ..analysis.models import ProjectOverview
from ..graph import TypeGraph, build_type_graph
from .base import BaseFormatter
from .rich_formatter import render_to_text


class GraphFormatter(BaseFormatter):
    """Render the type dependency graph (declared types only as rows)."""

    def build_table(self, graph: TypeGraph) -> Table:
        table = Table(title=f"Type dependencies ({graph.edge_count} edges)", show_lines=False)
        table.add_column("Type", style="bold yellow", no_wrap=True)
        table.add_column("Uses", style="cyan")
        table.add_column("Used by", style="green")
        for name in sorted(graph.declared):
            table.add_row(
                Text(name),
                Text(", ".join(graph.adjacency.get(name, [])) or "-"),
                Text(", ".join(graph.reverse.get(name, [])) or "-"),
            )
        return table

    def format(self, overview: ProjectOverview, root: Optional[Path] = None) -> str:
        return render_to_text(self.build_table(build_type_graph(overview)))

    def render(
        self,
        overview: ProjectOverview,
        root: Optional[Path] = None,
        console: Optional[Console] = None,
    ) -> None:
        (console or Console()).print(self.build_table(build_type_graph(overview)))
