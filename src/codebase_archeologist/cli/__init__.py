"""CLI entry point."""

import typer

app = typer.Typer(
    name="codebase-archeologist",
    help="Codebase Archeologist - engineering debt scanner for Unreal C++ projects",
    add_completion=False,
    rich_markup_mode="rich",
)


# Import commands to register them
from .scan import main as _main  # noqa: F401, E402
