"""
rhinolsp CLI.

- lsp.py: language server commands
- complete.py: completion, snippet and section commands
"""

import platform

import typer

from rhinolsp._version import get_version
from rhinolsp.cli.complete import complete_command, sections_command, snippets_command
from rhinolsp.cli.lsp import lsp_app

app = typer.Typer(
    help="""rhinolsp - autocomplete for Rhino test files

Command Types:
  • Editor: lsp run, lsp check
  • Inspection: complete, snippets, sections
    → Read rhino.toml from --project (default: current directory)
""",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"rhinolsp {get_version()}")
        typer.echo(f"Python   {platform.python_version()} ({platform.python_implementation()})")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
) -> None:
    """rhinolsp CLI main callback for global options."""
    pass


app.add_typer(lsp_app, name="lsp")
app.command(name="complete")(complete_command)
app.command(name="snippets")(snippets_command)
app.command(name="sections")(sections_command)


def main() -> None:
    app()


__all__ = ["app", "main", "version_callback"]
