"""Helpers for the `fix --diff` output.

Separated to keep `sigsync.cli.main` focused on CLI wiring and user interaction.
"""

from __future__ import annotations

import difflib
from pathlib import Path


def unified_diff(changes, root: Path) -> str:
    """Render document changes as one unified diff, paths relative to the root."""
    chunks: list[str] = []
    for change in changes:
        try:
            name = change.path.relative_to(root).as_posix()
        except ValueError:
            name = change.path.as_posix()
        chunks.extend(
            difflib.unified_diff(
                change.original.splitlines(keepends=True),
                change.updated.splitlines(keepends=True),
                fromfile=f"a/{name}",
                tofile=f"b/{name}",
            )
        )
    return "".join(chunks)
