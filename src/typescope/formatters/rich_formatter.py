"""Rich terminal formatter: the overview as a tree."""

from __future__ import annotations

import io
from pathlib import Path
from typing import Optional

from rich.console import Console, RenderableType
from rich.text import Text
from rich.tree import Tree

from ..analysis.models import FunctionInformation, ProjectOverview, TypeInformation
from .base import BaseFormatter
from .report import file_identifier


def _used(types: frozenset[str]) -> str:
    return ", ".join(sorted(types)) if types else "-"


def _function_label(fn: FunctionInformation) -> Text:
    return Text.assemble(
        (fn.name, "bold green"),
        f"({', '.join(fn.argument_types)})",
        " -> ",
        (fn.return_type, "cyan"),
        ("  used: ", "dim"),
        (_used(fn.used_types), "dim"),
    )


def _type_branch(parent: Tree, name: str, info: TypeInformation) -> None:
    branch = parent.add(Text.assemble((name, "bold yellow"), f" ({info.kind.value})"))

    functions = branch.add(Text("Functions", style="blue"))
    for fn in info.functions:
        functions.add(_function_label(fn))

    properties = branch.add(Text("Properties", style="blue"))
    for prop in info.properties:
        properties.add(Text.assemble((prop.name, "green"), ": ", (prop.type, "cyan")))

    branch.add(Text.assemble(("Used Types: ", "blue"), _used(info.used_types)))


def render_to_text(renderable: RenderableType, width: int = 120) -> str:
    """Render a rich renderable to plain text (no ANSI codes)."""
    buffer = io.StringIO()
    console = Console(file=buffer, width=width, color_system=None, force_terminal=False)
    console.print(renderable)
    return buffer.getvalue().rstrip("\n")


class RichFormatter(BaseFormatter):
    """Hierarchical report: files, their types, and each type's members."""

    def build_tree(self, overview: ProjectOverview, root: Optional[Path] = None) -> Tree:
        tree = Tree(Text("Files", style="bold cyan"))
        for path in sorted(overview.files, key=lambda p: file_identifier(p, root)):
            file_overview = overview.files[path]
            file_branch = tree.add(Text.assemble("File: ", (file_identifier(path, root), "bold")))
            types_branch = file_branch.add(Text("Types", style="magenta"))
            for name in sorted(file_overview.types):
                _type_branch(types_branch, name, file_overview.types[name])
        return tree

    def format(self, overview: ProjectOverview, root: Optional[Path] = None) -> str:
        return render_to_text(self.build_tree(overview, root))

    def render(
        self,
        overview: ProjectOverview,
        root: Optional[Path] = None,
        console: Optional[Console] = None,
    ) -> None:
        (console or Console()).print(self.build_tree(overview, root))
