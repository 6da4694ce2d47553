"""sigsync CLI - Interface signature drift checker.

This module provides the command-line interface for sigsync, enabling
mismatch checks, interface repairs, and the optional HTTP API.
"""

from __future__ import annotations

import logging
import traceback
from pathlib import Path
from typing import Annotated, Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(
    name="sigsync",
    help="Keep interface method signatures in sync with their implementations",
    no_args_is_help=True,
)

# Rich console for formatted output
console = Console()
err_console = Console(stderr=True)

# Global verbose flag
_verbose: bool = False


def set_verbose(verbose: bool) -> None:
    """Set global verbose mode."""
    global _verbose
    _verbose = verbose


def print_exception(e: Exception) -> None:
    """Print exception details in verbose mode."""
    if _verbose:
        err_console.print("\n[dim]--- Traceback (verbose mode) ---[/dim]")
        err_console.print(f"[dim]{traceback.format_exc()}[/dim]")


def configure_logging(verbose: bool) -> None:
    """Route log records through rich on stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=verbose, markup=False)],
        force=True,
    )


@app.callback()
def main_callback(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging and full tracebacks"),
    ] = False,
) -> None:
    """sigsync CLI - Interface signature drift checker."""
    set_verbose(verbose)
    configure_logging(verbose)


ProjectPath = Annotated[
    Path,
    typer.Argument(
        help="Path to the project directory",
        exists=True,
        file_okay=False,
        dir_okay=True,
        resolve_path=True,
    ),
]


@app.command()
def check(
    project_path: ProjectPath,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output machine-readable JSON"),
    ] = False,
) -> None:
    """Report implementing methods whose signature drifted from their interface.

    Exits with status 1 when mismatches are found.

    Example:
        sigsync check /path/to/project
        sigsync check /path/to/project --json
    """
    from sigsync.cli._tables import build_diagnostics_table
    from sigsync.core.serializer import SerializationError, serialize
    from sigsync.services.check_service import CheckService

    service = CheckService()
    if json_output:
        result = service.check(project_path)
    else:
        with console.status("[bold blue]Checking..."):
            result = service.check(project_path)

    if not result.success:
        err_console.print("[red]Error:[/red] Check failed")
        for error in result.errors:
            err_console.print(f"  - {error}")
        raise typer.Exit(1)

    if json_output:
        try:
            typer.echo(serialize(result.to_report()))
        except SerializationError as e:
            err_console.print(f"[red]Error:[/red] {e.message}")
            if e.details:
                err_console.print(f"  {e.details}")
            print_exception(e)
            raise typer.Exit(1)
        if result.has_diagnostics:
            raise typer.Exit(1)
        return

    console.print(f"[blue]Checked project:[/blue] {result.root}")
    console.print(f"  Documents: {result.documents_count}")
    console.print(f"  Types: {result.types_count}")
    console.print(f"  Methods: {result.methods_count}")
    if result.warnings:
        console.print(f"  [yellow]Warnings: {len(result.warnings)}[/yellow]")
        for warning in result.warnings:
            console.print(f"  [yellow]- {warning}[/yellow]")

    if not result.has_diagnostics:
        console.print("[green]✓[/green] All interface members match their implementations")
        return

    console.print(build_diagnostics_table(result.diagnostics, result.root))
    console.print(f"[yellow]![/yellow] {len(result.diagnostics)} signature mismatches")
    raise typer.Exit(1)


@app.command()
def fix(
    project_path: ProjectPath,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Compute repairs without writing files"),
    ] = False,
    method: Annotated[
        Optional[str],
        typer.Option("--method", "-m", help="Only repair methods with this name"),
    ] = None,
    show_diff: Annotated[
        bool,
        typer.Option("--diff", help="Print a unified diff of the changes"),
    ] = False,
) -> None:
    """Update interface members to match their implementations.

    Example:
        sigsync fix /path/to/project --dry-run --diff
        sigsync fix /path/to/project --method save
    """
    from sigsync.cli._diff_helpers import unified_diff
    from sigsync.cli._tables import build_applied_fixes_table
    from sigsync.core.cancellation import OperationCancelledError
    from sigsync.services.fix_service import FixService

    service = FixService()
    try:
        with console.status("[bold blue]Repairing..."):
            result = service.fix(project_path, dry_run=dry_run, method=method)
    except OperationCancelledError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        print_exception(e)
        raise typer.Exit(1)

    if not result.success:
        err_console.print("[red]Error:[/red] Fix failed")
        for error in result.errors:
            err_console.print(f"  - {error}")
        raise typer.Exit(1)

    if not result.applied:
        console.print("[green]✓[/green] Nothing to repair")
    else:
        console.print(build_applied_fixes_table(result.applied, result.root))
        if dry_run:
            console.print(
                f"[yellow]![/yellow] Dry run: {len(result.changes)} files would be updated"
            )
        else:
            console.print(
                f"[green]✓[/green] Updated {len(result.written_files)} files"
            )

    if show_diff and result.changes:
        typer.echo(unified_diff(result.changes, result.root), nl=False)

    for diagnostic in result.skipped:
        console.print(f"  [yellow]Skipped: {diagnostic.message}[/yellow]")
    if result.remaining:
        console.print(
            f"  [yellow]Remaining mismatches: {len(result.remaining)}[/yellow]"
        )


@app.command()
def serve(
    host: Annotated[
        str,
        typer.Option("--host", help="Bind host for the HTTP API"),
    ] = "127.0.0.1",
    port: Annotated[
        int,
        typer.Option("--port", help="Bind port for the HTTP API"),
    ] = 8000,
    reload: Annotated[
        bool,
        typer.Option("--reload", help="Auto-reload on code changes (dev only)"),
    ] = False,
) -> None:
    """Run sigsync HTTP API server (optional dependency).

    Requires the `api` extra (FastAPI + Uvicorn).
    """
    try:
        import uvicorn  # type: ignore[import-not-found]
    except ImportError as e:
        err_console.print(
            "[red]Error:[/red] HTTP API dependencies are not installed.\n"
            "[yellow]Hint:[/yellow] Install with: pip install 'sigsync[api]'"
        )
        print_exception(e)
        raise typer.Exit(1)

    uvicorn.run(
        "sigsync.api.app:create_app",
        host=host,
        port=port,
        reload=reload,
        factory=True,
    )


if __name__ == "__main__":
    app()
