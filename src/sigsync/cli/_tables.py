"""Rich table builders used by the CLI.

Kept separate to keep the command module focused on wiring.
"""

from __future__ import annotations

from pathlib import Path

from rich.table import Table


def _relative(path: str | Path, root: Path) -> str:
    try:
        return str(Path(path).relative_to(root))
    except ValueError:
        return str(path)


def build_diagnostics_table(diagnostics, root: Path) -> Table:
    """Build the (Location, Method, Implementation, Interface) table for `check`."""
    table = Table(show_header=True, title="Signature Mismatches")
    table.add_column("Location", style="cyan")
    table.add_column("Method")
    table.add_column("Implementation")
    table.add_column("Interface Member")
    for diagnostic in diagnostics:
        location = diagnostic.location
        table.add_row(
            f"{_relative(location.path, root)}:{location.line}:{location.column}",
            f"{diagnostic.containing_type}.{diagnostic.arguments[0]}",
            diagnostic.implementation_signature or "",
            f"{diagnostic.interface_type}: {diagnostic.interface_signature or ''}",
        )
    return table


def build_applied_fixes_table(applied, root: Path) -> Table:
    """Build the applied repairs table for `fix`."""
    table = Table(show_header=True, title="Updated Interface Members")
    table.add_column("Interface", style="cyan")
    table.add_column("Before")
    table.add_column("After", style="green")
    table.add_column("File")
    for fix in applied:
        table.add_row(
            fix.interface or "",
            fix.old_signature or "",
            fix.new_signature or "",
            ", ".join(_relative(path, root) for path in fix.paths),
        )
    return table
