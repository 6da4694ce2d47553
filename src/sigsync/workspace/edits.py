"""Project edit sets and committing them to disk."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from sigsync.workspace.project import Project

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DocumentEdit:
    """Replacement content for one document."""

    document_id: str
    content: bytes


@dataclass(frozen=True)
class ProjectEditSet:
    """The complete set of document replacements produced by one repair.

    Built in one step and applied atomically: applying it returns a new
    project snapshot and leaves the input snapshot untouched.
    """

    edits: tuple[DocumentEdit, ...] = ()

    @classmethod
    def empty(cls) -> ProjectEditSet:
        return cls()

    @classmethod
    def single(cls, document_id: str, content: bytes) -> ProjectEditSet:
        return cls(edits=(DocumentEdit(document_id=document_id, content=content),))

    @property
    def is_empty(self) -> bool:
        return not self.edits

    def __len__(self) -> int:
        return len(self.edits)

    def apply(self, project: Project) -> Project:
        """Apply every edit and return the resulting snapshot."""
        for edit in self.edits:
            project = project.with_document_content(edit.document_id, edit.content)
        return project


def commit(baseline: Project, updated: Project) -> list[Path]:
    """Write documents changed between two snapshots back to disk.

    Args:
        baseline: The snapshot the files on disk correspond to
        updated: The snapshot to persist

    Returns:
        Paths of the written files, in project order
    """
    written: list[Path] = []
    for document in updated.changed_documents(baseline):
        document.path.parent.mkdir(parents=True, exist_ok=True)
        document.path.write_bytes(document.content)
        logger.info(f"Updated {document.path}")
        written.append(document.path)
    return written
