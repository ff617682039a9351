"""CLI entry point: registers the analyze command."""

import typer

app = typer.Typer(
    name="typescope",
    help="typescope - declared types, members and type dependencies of Swift projects",
    add_completion=False,
    rich_markup_mode="rich",
)


# Import commands to register them
from .analyze import analyze as _analyze  # noqa: F401, E402
