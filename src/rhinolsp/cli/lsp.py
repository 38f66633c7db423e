"""
LSP (Language Server Protocol) CLI commands.

Commands for running the Rhino LSP server and checking that a workspace is
ready for it: dependencies installed, ``rhino.toml`` valid, catalog readable.
"""

import logging
from pathlib import Path
from typing import Annotated

import typer

from rhinolsp.core.catalog import load_catalog
from rhinolsp.core.config import CONFIG_FILENAME, find_config
from rhinolsp.core.errors import RhinoLspError

lsp_app = typer.Typer(
    help="Language Server Protocol (LSP) commands.",
    no_args_is_help=True,
)

INSTALL_HINT = "Install with: pip install rhinolsp[lsp]"


def _dependencies_missing(e: ImportError) -> typer.Exit:
    typer.echo(f"Error: LSP dependencies not installed: {e}\n{INSTALL_HINT}", err=True)
    return typer.Exit(code=1)


@lsp_app.command("run")
def lsp_run(
    stdio: bool = typer.Option(
        True,
        "--stdio/--no-stdio",
        help="Use stdio transport (default, for editor piping)",
    ),
    tcp: bool = typer.Option(
        False,
        "--tcp",
        help="Use TCP transport (for debugging)",
    ),
    port: int = typer.Option(
        2087,
        "--port",
        help="TCP port (only used with --tcp)",
    ),
) -> None:
    """
    Start the Rhino LSP server.

    By default uses stdio transport for editor integration.
    Use --tcp --port for debugging with a TCP connection.
    The workspace catalog is loaded when the editor sends ``initialize``.
    """
    try:
        from rhinolsp.lsp.server import server, start_server
    except ImportError as e:
        raise _dependencies_missing(e)

    try:
        if tcp:
            typer.echo(f"Starting Rhino LSP server on TCP port {port}...")
            server.start_tcp("127.0.0.1", port)
        else:
            start_server()
    except KeyboardInterrupt:
        typer.echo("\nLSP server stopped.")
    except Exception as e:
        typer.echo(f"Error starting LSP server: {e}", err=True)
        raise typer.Exit(code=1)


def _check_dependencies() -> list[str]:
    # keep pygls registration chatter out of the report
    logging.getLogger("pygls.feature_manager").setLevel(logging.ERROR)
    logging.getLogger("pygls").setLevel(logging.ERROR)

    missing = []
    try:
        import pygls

        typer.echo(f"pygls:        {getattr(pygls, '__version__', 'unknown')}")
    except ImportError:
        missing.append("pygls")

    try:
        import lsprotocol

        typer.echo(f"lsprotocol:   {getattr(lsprotocol, '__version__', 'unknown')}")
    except ImportError:
        missing.append("lsprotocol")
    return missing


def _check_workspace(project: Path) -> bool:
    """Load rhino.toml and the catalog the server would load for *project*."""
    root = project.resolve()
    config_path = root / CONFIG_FILENAME
    typer.echo(f"\nWorkspace:    {root}")
    typer.echo(f"Config:       {config_path if config_path.exists() else 'defaults (no ' + CONFIG_FILENAME + ')'}")

    try:
        config = find_config(root)
        catalog_dir = config.catalog_dir
        typer.echo(f"Catalog:      {catalog_dir}")
        if not catalog_dir.is_dir():
            typer.echo("Catalog directory not found.", err=True)
            return False
        catalog = load_catalog(catalog_dir)
    except RhinoLspError as e:
        typer.echo(f"Error: {e}", err=True)
        return False

    typer.echo(f"Actions:      {len(catalog.manifests)}")
    typer.echo(f"Macros:       {len(catalog.macros)}")
    typer.echo(f"Locators:     {len(catalog.locators)}")
    typer.echo(f"Annotations:  {len(catalog.annotations)}")
    return True


@lsp_app.command("check")
def lsp_check(
    project: Annotated[
        Path,
        typer.Option("--project", "-p", help="Project root holding rhino.toml"),
    ] = Path("."),
) -> None:
    """
    Verify LSP dependencies are installed and the workspace catalog loads.
    """
    missing = _check_dependencies()
    workspace_ok = _check_workspace(project)

    if missing:
        typer.echo(f"\nMissing dependencies: {', '.join(missing)}\n{INSTALL_HINT}", err=True)
        raise typer.Exit(code=1)
    if not workspace_ok:
        raise typer.Exit(code=1)

    typer.echo("\nAll LSP dependencies installed. Workspace catalog loaded.")
