"""
Completion commands.

Run the completion engine against a file from the shell, which is handy
when checking a catalog without an editor attached.
"""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from rhinolsp.completion import CompletionDispatcher, RequestKind, synthesize_all
from rhinolsp.core.catalog import load_catalog
from rhinolsp.core.config import ProjectConfig, find_config
from rhinolsp.core.errors import RhinoLspError

console = Console()

ProjectOption = Annotated[
    Path,
    typer.Option("--project", "-p", help="Project root holding rhino.toml"),
]
JsonOption = Annotated[bool, typer.Option("--json", help="Output as JSON")]


def _load(project: Path) -> tuple[ProjectConfig, CompletionDispatcher]:
    try:
        config = find_config(project.resolve())
        catalog = load_catalog(config.catalog_dir)
    except RhinoLspError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1)
    return config, CompletionDispatcher(catalog, config.completion)


def complete_command(
    file: Annotated[Path, typer.Argument(help="Rhino test file", exists=True, dir_okay=False)],
    line: Annotated[int, typer.Argument(help="Cursor line (1-indexed)", min=1)],
    column: Annotated[int, typer.Argument(help="Cursor column (1-indexed)", min=1)],
    kind: Annotated[RequestKind, typer.Option("--kind", "-k", help="Request path")] = RequestKind.ACTION,
    project: ProjectOption = Path("."),
    output_json: JsonOption = False,
) -> None:
    """Show the completions offered at a cursor position."""
    _, dispatcher = _load(project)
    text = file.read_text(encoding="utf-8")
    candidates = dispatcher.complete(text, line - 1, column - 1, kind)

    if output_json:
        console.print_json(json.dumps([{**asdict(c), "kind": c.kind.value} for c in candidates]))
        return

    if not candidates:
        console.print("[dim]No completions.[/dim]")
        return

    table = Table(title=f"Completions ({kind.value})")
    table.add_column("Label")
    table.add_column("Insert", style="cyan")
    table.add_column("Documentation", style="dim")

    for candidate in candidates:
        table.add_row(escape(candidate.label), escape(candidate.insert_text), escape(candidate.documentation))

    console.print(table)
    console.print(f"\n[dim]{len(candidates)} candidate(s)[/dim]")


def snippets_command(
    action: Annotated[str | None, typer.Option("--action", "-a", help="Only this action key")] = None,
    project: ProjectOption = Path("."),
    output_json: JsonOption = False,
) -> None:
    """List the snippets synthesized from the catalog."""
    _, dispatcher = _load(project)
    catalog = dispatcher.catalog

    manifests = dispatcher.manifests
    if action:
        manifests = [m for m in manifests if m.key == action]
        if not manifests:
            console.print(f"[red]Action not found: {action}[/red]")
            raise typer.Exit(code=1)

    snippets = synthesize_all(manifests, catalog.locator_names, catalog.attribute_names)

    if output_json:
        console.print_json(json.dumps([asdict(s) for s in snippets]))
        return

    table = Table(title="Snippets")
    table.add_column("Name")
    table.add_column("Template", style="cyan")
    table.add_column("Source", style="dim")

    for snippet in snippets:
        table.add_row(escape(snippet.name), escape(snippet.template), escape(snippet.detail))

    console.print(table)
    console.print(f"\n[dim]{len(snippets)} snippet(s) from {len(manifests)} action(s)[/dim]")


def sections_command(
    file: Annotated[Path, typer.Argument(help="Rhino test file", exists=True, dir_okay=False)],
    annotation: Annotated[str, typer.Option("--annotation", "-n", help="Section name")] = "test-actions",
    project: ProjectOption = Path("."),
) -> None:
    """Print one annotated section of a test file."""
    _, dispatcher = _load(project)
    lines = dispatcher.section(file.read_text(encoding="utf-8"), annotation)

    if not lines:
        console.print(f"No [{annotation}] section.", markup=False, style="dim")
        raise typer.Exit(code=1)

    for line in lines:
        console.print(line, markup=False, highlight=False)
