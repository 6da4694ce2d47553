"""Signature synchronizer.

Rewrites an interface member's declaration so that its parameter list and
return type match the implementing method flagged by the mismatch detector.
Every resolution failure degrades to an empty edit set; only host failures
(cancellation, unreadable input) propagate.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from tree_sitter import Node

from sigsync.adapters.base import LanguageAdapter
from sigsync.analysis.matching import find_interface_member
from sigsync.analysis.rendering import PARAMETER_TYPE_FORMAT, TypeDisplayFormat, render_type
from sigsync.core.cancellation import CancellationToken
from sigsync.core.config import SigsyncConfig, get_config
from sigsync.core.models import MethodSymbol, SourceLocation
from sigsync.fix.document_resolution import DocumentResolver
from sigsync.fix.reconcile import reconcile_parameters
from sigsync.workspace.edits import ProjectEditSet
from sigsync.workspace.project import Document, Project

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeclarationSite:
    """A method declaration node and the document it was read from."""

    document: Document
    node: Node


class SignatureSynchronizer:
    """Produce the project edit that makes an interface member match its implementation."""

    def __init__(
        self,
        adapter: LanguageAdapter,
        config: SigsyncConfig | None = None,
        display_format: TypeDisplayFormat = PARAMETER_TYPE_FORMAT,
        resolver: DocumentResolver | None = None,
    ) -> None:
        """Initialize the synchronizer.

        Args:
            adapter: Language front end providing trees, symbols and rewriting
            config: Configuration (defaults to the global configuration)
            display_format: Rendering options for rebuilt types
            resolver: Document resolution chain (defaults to the full chain)
        """
        self._adapter = adapter
        self._config = config or get_config()
        self._display_format = display_format
        self._resolver = resolver or DocumentResolver(adapter, self._config.source_extension)

    def synchronize(
        self,
        project: Project,
        document_id: str,
        position: int,
        cancellation: CancellationToken | None = None,
    ) -> Project:
        """Apply the repair for the method declared at a position.

        Returns:
            The updated project, or ``project`` itself when nothing resolves
        """
        return self.compute_edit(project, document_id, position, cancellation).apply(project)

    def compute_edit(
        self,
        project: Project,
        document_id: str,
        position: int,
        cancellation: CancellationToken | None = None,
    ) -> ProjectEditSet:
        """Compute the repair for the method declared at a position.

        Args:
            project: Current project snapshot
            document_id: Document holding the diagnostic
            position: Byte offset of the diagnostic (the method name)
            cancellation: Optional cancellation token

        Returns:
            An edit set with one document edit, or an empty one
        """
        document = project.get_document(document_id)
        site = self._find_declaration(document, position, cancellation)
        if site is None:
            logger.debug(f"No method declaration at {document.path}:{position}")
            return ProjectEditSet.empty()

        symbol_table = self._adapter.build_symbol_table(project)
        method = symbol_table.find_method_declared_in(
            document.id, site.node.start_byte, site.node.end_byte
        )
        if method is None:
            logger.debug(f"No method symbol declared at {document.path}:{position}")
            return ProjectEditSet.empty()

        pair = find_interface_member(method, symbol_table, self._config.member_matching)
        if pair is None or not isinstance(pair.member, MethodSymbol):
            logger.debug(f"{method.qualified_name}: no interface method to update")
            return ProjectEditSet.empty()
        member = pair.member
        if not member.locations:
            return ProjectEditSet.empty()

        member_site = self._find_member_declaration(project, member.locations[0], cancellation)
        if member_site is None:
            logger.debug(f"{member.qualified_name}: declaration node not found")
            return ProjectEditSet.empty()

        new_declaration = self._rebuild_declaration(member_site, member, site, method)

        resolved = self._resolver.resolve(
            project, member, pair.interface, method, document.id, cancellation
        )
        if resolved is None:
            return ProjectEditSet.empty()

        target = resolved.document
        span = self._locate_in_target(member_site, target, cancellation)
        if span is None:
            logger.debug(f"{member.qualified_name}: declaration not present in {target.path}")
            return ProjectEditSet.empty()

        start, end = span
        content = target.content[:start] + new_declaration.encode("utf-8") + target.content[end:]
        if content == target.content:
            return ProjectEditSet.empty()

        logger.debug(f"Rewrote {member.qualified_name} in {target.path}")
        return ProjectEditSet.single(target.id, content)

    def _rebuild_declaration(
        self,
        site: DeclarationSite,
        member: MethodSymbol,
        implementation_site: DeclarationSite,
        implementation: MethodSymbol,
    ) -> str:
        parameters = reconcile_parameters(member.parameters, implementation.parameters)
        rendered_parameters = [
            self._adapter.render_parameter(p, render_type(p.type, self._display_format))
            for p in parameters
        ]
        return self._adapter.rewrite_method_declaration(
            site.node,
            site.document.content,
            rendered_parameters,
            render_type(implementation.return_type, self._display_format),
            type_parameters=self._adapter.method_type_parameters(
                implementation_site.node, implementation_site.document.content
            ),
        )

    def _find_declaration(
        self,
        document: Document,
        position: int,
        cancellation: CancellationToken | None,
    ) -> DeclarationSite | None:
        if cancellation is not None:
            cancellation.raise_if_cancelled()
        root = self._adapter.parse(document.content).root_node
        node = self._adapter.find_method_declaration(root, position)
        if node is None:
            return None
        return DeclarationSite(document=document, node=node)

    def _find_member_declaration(
        self,
        project: Project,
        location: SourceLocation,
        cancellation: CancellationToken | None,
    ) -> DeclarationSite | None:
        if location.document_id in project:
            document = project.get_document(location.document_id)
        else:
            document = project.find_document_by_path(location.path)
            if document is None:
                return None
        return self._find_declaration(document, location.start_byte, cancellation)

    def _locate_in_target(
        self,
        site: DeclarationSite,
        target: Document,
        cancellation: CancellationToken | None,
    ) -> tuple[int, int] | None:
        """Find the byte span of the member's declaration in the target document.

        When the target is the document the declaration was read from, the
        node's own span is used. Otherwise the target must contain a method
        declaration with identical text.
        """
        if target.id == site.document.id:
            return site.node.start_byte, site.node.end_byte

        old_text = site.document.content[site.node.start_byte:site.node.end_byte]
        if cancellation is not None:
            cancellation.raise_if_cancelled()
        root = self._adapter.parse(target.content).root_node
        for node in self._adapter.iter_method_declarations(root):
            if target.content[node.start_byte:node.end_byte] == old_text:
                return node.start_byte, node.end_byte
        return None
