"""Java language adapter using tree-sitter-java.

This module implements the LanguageAdapter interface for Java source code,
using tree-sitter for parsing and a two-phase approach for symbol resolution.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import TYPE_CHECKING

import tree_sitter_java as tsjava
from tree_sitter import Language, Node, Parser, Tree

from sigsync.adapters.base import LanguageAdapter, SymbolTable
from sigsync.adapters.java.ast_utils import JavaAstUtils
from sigsync.adapters.java.resolver import JavaResolver
from sigsync.adapters.java.scanner import JavaScanner
from sigsync.core.config import SigsyncConfig, get_config
from sigsync.core.models import LanguageType, ParameterSymbol

if TYPE_CHECKING:
    from sigsync.workspace.project import Project


class JavaAdapter(LanguageAdapter):
    """Java language adapter using tree-sitter.

    Implements two-phase symbol table construction:
    - Phase 1: Scan all documents to register type names
    - Phase 2: Resolve interfaces and member signatures using those names
    """

    def __init__(self, config: SigsyncConfig | None = None) -> None:
        """Initialize the Java adapter.

        Args:
            config: Configuration (defaults to the global configuration)
        """
        self._config = config or get_config()
        self._language = Language(tsjava.language())
        self._parser = Parser(self._language)
        self._scanner = JavaScanner(self._parser)
        self._resolver = JavaResolver(self._parser, self._config.nullable_annotations)

    @property
    def language_type(self) -> LanguageType:
        """Return Java as the supported language type."""
        return LanguageType.JAVA

    def parse(self, content: bytes) -> Tree:
        return self._parser.parse(content)

    def build_symbol_table(self, project: Project) -> SymbolTable:
        """Scan all Java documents and build the symbol table.

        Args:
            project: The project snapshot to analyze

        Returns:
            SymbolTable containing all resolved types and members
        """
        symbol_table = self._scanner.scan_project(project)
        return self._resolver.resolve_project(project, symbol_table)

    def find_method_declaration(self, root: Node, offset: int) -> Node | None:
        node = root.descendant_for_byte_range(offset, offset)
        return JavaAstUtils.find_ancestor(node, "method_declaration")

    def method_declaration_name(self, node: Node, content: bytes) -> str | None:
        name_node = node.child_by_field_name("name")
        if name_node is None:
            return None
        return JavaAstUtils.get_node_text(name_node, content)

    def iter_method_declarations(self, root: Node) -> Iterator[Node]:
        return JavaAstUtils.iter_descendants(root, "method_declaration")

    def render_parameter(self, parameter: ParameterSymbol, rendered_type: str) -> str:
        """Render ``[@Nullable ]Type name``.

        The nullability annotation is carried over so the rewritten parameter
        keeps the implementation's nullability.
        """
        declaration = f"{rendered_type} {parameter.name}"
        if parameter.nullable and parameter.nullable_annotation:
            return f"{parameter.nullable_annotation} {declaration}"
        return declaration

    def method_type_parameters(self, node: Node, content: bytes) -> str:
        """Return the ``<...>`` clause of a generic method, or an empty string."""
        type_parameters = JavaAstUtils.find_child(node, "type_parameters")
        if type_parameters is None:
            return ""
        return JavaAstUtils.get_node_text(type_parameters, content)

    def rewrite_method_declaration(
        self,
        node: Node,
        content: bytes,
        parameters: Sequence[str],
        return_type: str,
        type_parameters: str | None = None,
    ) -> str:
        """Rebuild a method declaration with new parameters and return type.

        Replaces the ``formal_parameters`` node and the return type node, and
        drops C-style return dimensions (``int foo()[]``) since the rendered
        return type carries its own array rank. Modifiers, annotations, throws
        clause, body and formatting are kept as written.

        Args:
            node: The method_declaration node
            content: Source content of the document holding the node
            parameters: Rendered parameter declarations
            return_type: Rendered return type
            type_parameters: New type-parameter clause; None keeps the
                existing one, an empty string removes it

        Returns:
            The text of the rewritten declaration
        """
        replacements: list[tuple[int, int, bytes]] = []

        type_node = node.child_by_field_name("type")
        if type_node is not None:
            replacements.append(
                (type_node.start_byte, type_node.end_byte, return_type.encode("utf-8"))
            )
            if type_parameters is not None:
                replacements.extend(
                    self._type_parameter_replacements(node, type_node, type_parameters)
                )

        params_node = node.child_by_field_name("parameters")
        if params_node is not None:
            new_params = "(" + ", ".join(parameters) + ")"
            replacements.append(
                (params_node.start_byte, params_node.end_byte, new_params.encode("utf-8"))
            )

        dimensions_node = node.child_by_field_name("dimensions")
        if dimensions_node is not None:
            replacements.append((dimensions_node.start_byte, dimensions_node.end_byte, b""))

        text = content[node.start_byte:node.end_byte]
        # Splice back to front so earlier offsets stay valid
        for start, end, replacement in sorted(replacements, reverse=True):
            text = text[: start - node.start_byte] + replacement + text[end - node.start_byte:]
        return text.decode("utf-8")

    @staticmethod
    def _type_parameter_replacements(
        node: Node, type_node: Node, type_parameters: str
    ) -> list[tuple[int, int, bytes]]:
        current = JavaAstUtils.find_child(node, "type_parameters")
        if current is None:
            if not type_parameters:
                return []
            # Insert ahead of the return type
            clause = f"{type_parameters} ".encode("utf-8")
            return [(type_node.start_byte, type_node.start_byte, clause)]
        if type_parameters:
            return [(current.start_byte, current.end_byte, type_parameters.encode("utf-8"))]
        # Remove the clause and the whitespace up to the next token
        following = current.next_sibling
        end = following.start_byte if following is not None else current.end_byte
        return [(current.start_byte, end, b"")]
