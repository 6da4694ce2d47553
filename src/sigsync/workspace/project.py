"""Immutable project snapshots.

A Project is an ordered collection of source documents. Replacing a
document's content yields a new Project that shares every other Document
object with the old one, so a snapshot handed to one caller never changes
underneath it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from sigsync.adapters.base import DEFAULT_ID_LENGTH, generate_document_id

if TYPE_CHECKING:
    from sigsync.core.config import SigsyncConfig

logger = logging.getLogger(__name__)


class ProjectLoadError(Exception):
    """Raised when a project root cannot be loaded."""

    def __init__(self, root: Path, reason: str) -> None:
        self.root = root
        self.reason = reason
        super().__init__(f"Cannot load project at {root}: {reason}")


class DocumentNotFoundError(Exception):
    """Raised when a document ID is not part of a project."""

    def __init__(self, document_id: str) -> None:
        self.document_id = document_id
        super().__init__(f"Document not found: {document_id}")


@dataclass(frozen=True)
class Document:
    """A source document: identity, location and UTF-8 content."""

    id: str
    path: Path
    content: bytes

    @property
    def name(self) -> str:
        """Display name (file name with extension)."""
        return self.path.name

    @property
    def text(self) -> str:
        return self.content.decode("utf-8")

    def with_content(self, content: bytes) -> Document:
        return Document(id=self.id, path=self.path, content=content)


@dataclass(frozen=True)
class Project:
    """An immutable, ordered set of documents rooted at a directory."""

    root: Path
    documents: tuple[Document, ...] = ()
    _index: Mapping[str, int] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "_index", {doc.id: position for position, doc in enumerate(self.documents)}
        )

    @classmethod
    def load(cls, root: Path, config: SigsyncConfig) -> Project:
        """Load every source document under a directory.

        Documents are ordered by relative path. Directories named in
        ``config.exclude_dirs`` are skipped, as are files that are not valid
        UTF-8.

        Args:
            root: Project root directory
            config: Configuration providing the extension and exclusions

        Returns:
            The loaded project snapshot

        Raises:
            ProjectLoadError: If the root is missing or not a directory
        """
        root = root.resolve()
        if not root.exists():
            raise ProjectLoadError(root, "path does not exist")
        if not root.is_dir():
            raise ProjectLoadError(root, "path is not a directory")

        excluded = set(config.exclude_dirs)
        documents: list[Document] = []
        for source_file in sorted(root.rglob(f"*.{config.source_extension}")):
            relative = source_file.relative_to(root)
            if excluded.intersection(relative.parts[:-1]):
                continue
            content = source_file.read_bytes()
            try:
                content.decode("utf-8")
            except UnicodeDecodeError as e:
                logger.warning(f"Skipping {source_file}: not valid UTF-8 ({e})")
                continue
            documents.append(
                Document(
                    id=generate_document_id(str(root), relative.as_posix(), config.id_length),
                    path=source_file,
                    content=content,
                )
            )

        logger.debug(f"Loaded {len(documents)} documents from {root}")
        return cls(root=root, documents=tuple(documents))

    @classmethod
    def from_sources(
        cls, root: Path, sources: Mapping[str, str], id_length: int = DEFAULT_ID_LENGTH
    ) -> Project:
        """Build a project from in-memory sources keyed by relative path."""
        root = root.resolve()
        documents = tuple(
            Document(
                id=generate_document_id(str(root), relative_path, id_length),
                path=root / relative_path,
                content=text.encode("utf-8"),
            )
            for relative_path, text in sources.items()
        )
        return cls(root=root, documents=documents)

    def __iter__(self) -> Iterator[Document]:
        return iter(self.documents)

    def __len__(self) -> int:
        return len(self.documents)

    def __contains__(self, document_id: object) -> bool:
        return document_id in self._index

    def get_document(self, document_id: str) -> Document:
        """Get a document by ID.

        Raises:
            DocumentNotFoundError: If the project has no such document
        """
        position = self._index.get(document_id)
        if position is None:
            raise DocumentNotFoundError(document_id)
        return self.documents[position]

    def find_document_by_path(self, path: str | Path) -> Document | None:
        """Find the document stored at a file path, or None."""
        target = str(Path(path))
        for document in self.documents:
            if str(document.path) == target:
                return document
        return None

    def find_document_by_name(self, name: str) -> Document | None:
        """Find the first document whose display name equals ``name``."""
        for document in self.documents:
            if document.name == name:
                return document
        return None

    def with_document_content(self, document_id: str, content: bytes) -> Project:
        """Return a new project with one document's content replaced.

        Raises:
            DocumentNotFoundError: If the project has no such document
        """
        position = self._index.get(document_id)
        if position is None:
            raise DocumentNotFoundError(document_id)
        documents = list(self.documents)
        documents[position] = documents[position].with_content(content)
        return Project(root=self.root, documents=tuple(documents))

    def changed_documents(self, baseline: Project) -> list[Document]:
        """List documents whose content differs from the same document in ``baseline``."""
        changed: list[Document] = []
        for document in self.documents:
            if document.id not in baseline:
                changed.append(document)
            elif baseline.get_document(document.id).content != document.content:
                changed.append(document)
        return changed
