"""Java scanner for Phase 1 symbol table construction.

This module scans Java documents to register every declared type name,
so that Phase 2 can resolve same-package and imported type references.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tree_sitter import Node, Parser

from sigsync.adapters.base import SymbolTable
from sigsync.adapters.java.ast_utils import TYPE_BODIES, TYPE_DECLARATIONS, JavaAstUtils

if TYPE_CHECKING:
    from sigsync.workspace.project import Document, Project

logger = logging.getLogger(__name__)


class JavaScanner:
    """Phase 1: Scan Java documents to build the type name map.

    Collects all type definitions without resolving references.
    """

    def __init__(self, parser: Parser) -> None:
        """Initialize the scanner.

        Args:
            parser: Configured tree-sitter parser for Java
        """
        self._parser = parser

    def scan_project(self, project: Project) -> SymbolTable:
        """Scan all documents and build the type name map.

        Args:
            project: The project snapshot to scan

        Returns:
            SymbolTable with ``type_map`` populated
        """
        symbol_table = SymbolTable()

        for document in project:
            try:
                self._scan_document(document, symbol_table)
            except Exception as e:
                logger.warning(f"Failed to scan {document.path}: {e}")

        return symbol_table

    def _scan_document(self, document: Document, symbol_table: SymbolTable) -> None:
        """Scan a single document for type declarations."""
        content = document.content
        tree = self._parser.parse(content)
        root = tree.root_node

        package_name = JavaAstUtils.extract_package(root, content)
        self._scan_type_declarations(root, content, package_name, symbol_table)

    def _scan_type_declarations(
        self,
        node: Node,
        content: bytes,
        package_name: str,
        symbol_table: SymbolTable,
        parent_type: str | None = None,
    ) -> None:
        """Recursively scan for type declarations.

        Args:
            node: Current AST node
            content: Source file content
            package_name: Current package name
            symbol_table: Symbol table to populate
            parent_type: Parent type's qualified name (for nested types)
        """
        for child in node.children:
            if child.type in TYPE_DECLARATIONS:
                name_node = child.child_by_field_name("name")
                if name_node is None:
                    continue

                type_name = JavaAstUtils.get_node_text(name_node, content)

                if parent_type:
                    qualified_name = f"{parent_type}.{type_name}"
                elif package_name:
                    qualified_name = f"{package_name}.{type_name}"
                else:
                    qualified_name = type_name

                symbol_table.add_type(type_name, qualified_name)

                body_node = child.child_by_field_name("body")
                if body_node:
                    self._scan_type_declarations(
                        body_node, content, package_name, symbol_table, qualified_name
                    )

            elif child.type in TYPE_BODIES:
                self._scan_type_declarations(
                    child, content, package_name, symbol_table, parent_type
                )
