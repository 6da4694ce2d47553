"""Project model: immutable document snapshots and edit sets."""

from sigsync.workspace.edits import DocumentEdit, ProjectEditSet, commit
from sigsync.workspace.project import (
    Document,
    DocumentNotFoundError,
    Project,
    ProjectLoadError,
)

__all__ = [
    "Document",
    "DocumentEdit",
    "DocumentNotFoundError",
    "Project",
    "ProjectEditSet",
    "ProjectLoadError",
    "commit",
]
