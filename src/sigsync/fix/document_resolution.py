"""Locate the document that holds an interface member's declaration.

The location recorded on the member symbol is tried first; because a member
may have moved, or the recorded file may not be the authoritative copy in a
multi-root project, two fallbacks follow. The first strategy that matches wins.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from sigsync.adapters.base import LanguageAdapter
from sigsync.core.cancellation import CancellationToken
from sigsync.core.models import MethodSymbol, TypeSymbol
from sigsync.workspace.project import Document, Project

logger = logging.getLogger(__name__)


class ResolutionStrategy(str, Enum):
    """Strategy that located the declaring document."""

    RECORDED_PATH = "recorded_path"
    TYPE_FILE_NAME = "type_file_name"
    METHOD_SCAN = "method_scan"


DEFAULT_STRATEGIES = (
    ResolutionStrategy.RECORDED_PATH,
    ResolutionStrategy.TYPE_FILE_NAME,
    ResolutionStrategy.METHOD_SCAN,
)


@dataclass(frozen=True)
class ResolvedDocument:
    """A declaring document and how it was found."""

    document: Document
    strategy: ResolutionStrategy


class DocumentResolver:
    """Ordered fallback chain for finding the document to edit.

    The default chain, which ``strategies`` may reorder or narrow:

    1. The document whose path equals the path recorded at the member's
       first location.
    2. The document named ``<InterfaceName>.<extension>``.
    3. The first document, other than the implementation's, declaring a
       method with the implementing method's name.
    """

    def __init__(
        self,
        adapter: LanguageAdapter,
        source_extension: str,
        strategies: Sequence[ResolutionStrategy] = DEFAULT_STRATEGIES,
    ) -> None:
        """Initialize the resolver.

        Args:
            adapter: Language front end used by the method scan
            source_extension: File extension of source documents
            strategies: Strategies to try, in order
        """
        self._adapter = adapter
        self._source_extension = source_extension
        self._strategies = tuple(strategies)

    def resolve(
        self,
        project: Project,
        member: MethodSymbol,
        interface: TypeSymbol,
        implementation: MethodSymbol,
        implementation_document_id: str,
        cancellation: CancellationToken | None = None,
    ) -> ResolvedDocument | None:
        """Resolve the document holding the member's declaration.

        Args:
            project: Current project snapshot
            member: The interface member to edit
            interface: The interface declaring the member
            implementation: The implementing method
            implementation_document_id: Document of the implementing method
            cancellation: Optional cancellation token

        Returns:
            The resolved document, or None when every strategy fails
        """
        for strategy in self._strategies:
            if strategy is ResolutionStrategy.RECORDED_PATH:
                document = self._by_recorded_path(project, member)
            elif strategy is ResolutionStrategy.TYPE_FILE_NAME:
                document = project.find_document_by_name(
                    f"{interface.name}.{self._source_extension}"
                )
            else:
                document = self._by_method_scan(
                    project, implementation.name, implementation_document_id, cancellation
                )
            if document is not None:
                return self._resolved(document, strategy)

        logger.debug(f"No document declares {member.qualified_name}")
        return None

    @staticmethod
    def _by_recorded_path(project: Project, member: MethodSymbol) -> Document | None:
        if not member.locations:
            return None
        return project.find_document_by_path(member.locations[0].path)

    def _by_method_scan(
        self,
        project: Project,
        method_name: str,
        implementation_document_id: str,
        cancellation: CancellationToken | None,
    ) -> Document | None:
        for document in project:
            if document.id == implementation_document_id:
                continue
            if cancellation is not None:
                cancellation.raise_if_cancelled()
            if self._declares_method(document, method_name):
                return document
        return None

    def _declares_method(self, document: Document, method_name: str) -> bool:
        root = self._adapter.parse(document.content).root_node
        return any(
            self._adapter.method_declaration_name(node, document.content) == method_name
            for node in self._adapter.iter_method_declarations(root)
        )

    @staticmethod
    def _resolved(document: Document, strategy: ResolutionStrategy) -> ResolvedDocument:
        logger.debug(f"Resolved {document.path} by {strategy.value}")
        return ResolvedDocument(document=document, strategy=strategy)
