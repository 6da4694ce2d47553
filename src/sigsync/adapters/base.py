"""Base classes and utilities for language adapters.

This module defines the LanguageAdapter abstract interface for implementing
language-specific front ends, along with the symbol table the analysis
queries and deterministic document ID generation.
"""

from __future__ import annotations

import hashlib
from abc import ABC, abstractmethod
from collections.abc import Iterator, Sequence
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from sigsync.core.models import LanguageType, MethodSymbol, ParameterSymbol, TypeSymbol

if TYPE_CHECKING:
    from tree_sitter import Node, Tree

    from sigsync.workspace.project import Project


class FileContext(BaseModel):
    """File-level context for symbol resolution.

    Contains information about the current file being parsed,
    used to resolve short names to qualified names.
    """

    package: str = Field(..., description="Current package/module name")
    imports: list[str] = Field(default_factory=list, description="Import statements")


class SymbolTable(BaseModel):
    """Symbol table for two-phase parsing.

    Phase 1 (definition scanning) fills ``type_map``; phase 2 (reference
    resolution) fills ``types`` with fully resolved type symbols. Once built,
    the table is only read, so detection can share it across threads.
    """

    type_map: dict[str, list[str]] = Field(
        default_factory=dict, description="short_name -> [qualified_names]"
    )
    types: dict[str, TypeSymbol] = Field(
        default_factory=dict, description="qualified_name -> type symbol"
    )

    def add_type(self, short_name: str, qualified_name: str) -> None:
        """Register a type name in the symbol table."""
        if short_name not in self.type_map:
            self.type_map[short_name] = []
        if qualified_name not in self.type_map[short_name]:
            self.type_map[short_name].append(qualified_name)

    def add_type_symbol(self, symbol: TypeSymbol) -> None:
        """Register a resolved type.

        A second declaration of the same qualified name (e.g. the same type
        in two source roots) is merged: its interfaces, members and
        locations are appended to the existing symbol.
        """
        existing = self.types.get(symbol.qualified_name)
        if existing is None:
            self.types[symbol.qualified_name] = symbol
            return
        interfaces = existing.interfaces + tuple(
            i for i in symbol.interfaces if i not in existing.interfaces
        )
        self.types[symbol.qualified_name] = existing.model_copy(
            update={
                "interfaces": interfaces,
                "members": existing.members + symbol.members,
                "locations": existing.locations + symbol.locations,
            }
        )

    def get_type(self, qualified_name: str) -> TypeSymbol | None:
        return self.types.get(qualified_name)

    def interfaces_of(self, type_symbol: TypeSymbol) -> list[TypeSymbol]:
        """Get the directly listed interfaces of a type that are declared in the project.

        Args:
            type_symbol: The implementing type.

        Returns:
            Interface symbols in the order the type lists them.
        """
        interfaces: list[TypeSymbol] = []
        for qualified_name in type_symbol.interfaces:
            candidate = self.types.get(qualified_name)
            if candidate is not None and candidate.is_interface:
                interfaces.append(candidate)
        return interfaces

    def iter_methods(self) -> Iterator[MethodSymbol]:
        """Iterate over every method symbol in deterministic order."""
        for qualified_name in sorted(self.types):
            yield from self.types[qualified_name].methods

    def find_method_declared_in(
        self, document_id: str, start_byte: int, end_byte: int
    ) -> MethodSymbol | None:
        """Find the method declared by a declaration node.

        The declared method is the one whose name location falls inside the
        node's byte range; the earliest one wins, as a method's own name
        precedes anything declared in its body.

        Args:
            document_id: The document containing the declaration.
            start_byte: Start offset of the declaration node.
            end_byte: End offset of the declaration node.

        Returns:
            The declared method symbol, or None.
        """
        found: MethodSymbol | None = None
        found_at = end_byte
        for method in self.iter_methods():
            for location in method.locations:
                if (
                    location.document_id == document_id
                    and start_byte <= location.start_byte < found_at
                ):
                    found = method
                    found_at = location.start_byte
        return found

    def resolve_type(self, short_name: str, context: FileContext) -> str | None:
        """Resolve a type's short name to its qualified name using file context.

        Resolution order:
        1. Check same-package types
        2. Check imported types (explicit imports)
        3. Check wildcard imports
        4. Fall back to the only candidate, if there is exactly one

        Candidates are sorted so resolution does not depend on the order in
        which documents were scanned.

        Args:
            short_name: The simple type name to resolve
            context: The file context containing package and imports

        Returns:
            The qualified name if resolved, None otherwise
        """
        candidates = sorted(self.type_map.get(short_name, []))
        if not candidates:
            return None

        same_package = f"{context.package}.{short_name}" if context.package else short_name
        if same_package in candidates:
            return same_package

        for imp in context.imports:
            if imp.endswith(f".{short_name}"):
                if imp in candidates:
                    return imp

        for imp in context.imports:
            if imp.endswith(".*"):
                prefix = imp[:-2]
                for candidate in candidates:
                    if candidate.startswith(prefix + ".") and candidate.endswith(
                        f".{short_name}"
                    ):
                        return candidate

        # Unique candidate as fallback
        return candidates[0] if len(candidates) == 1 else None


DEFAULT_ID_LENGTH = 16


def generate_document_id(root: str, relative_path: str, id_length: int = DEFAULT_ID_LENGTH) -> str:
    """Generate a deterministic document ID.

    Uses SHA256 hash of the project root and the document's relative path so
    the same file always gets the same ID across loads and edits.

    Args:
        root: The project root directory
        relative_path: The document path relative to the root (POSIX form)
        id_length: Number of hex characters to keep

    Returns:
        A hex string ID of ``id_length`` characters
    """
    content = "|".join([root, relative_path])
    return hashlib.sha256(content.encode()).hexdigest()[:id_length]


class LanguageAdapter(ABC):
    """Abstract base class for language-specific front ends.

    Provides the host services the detector and synchronizer consume:
    parsing, two-phase symbol table construction, position lookup and
    method declaration rewriting.
    """

    @property
    @abstractmethod
    def language_type(self) -> LanguageType:
        """Return the supported language type."""
        ...

    @abstractmethod
    def parse(self, content: bytes) -> Tree:
        """Parse source text into a syntax tree."""
        ...

    @abstractmethod
    def build_symbol_table(self, project: Project) -> SymbolTable:
        """Scan every document of a project and build the symbol table.

        Args:
            project: The project snapshot to analyze

        Returns:
            SymbolTable containing all resolved types and members
        """
        ...

    @abstractmethod
    def find_method_declaration(self, root: Node, offset: int) -> Node | None:
        """Find the method declaration enclosing a byte offset.

        Args:
            root: Root node of the tree
            offset: Byte offset into the document

        Returns:
            The nearest enclosing method declaration node, or None
        """
        ...

    @abstractmethod
    def method_declaration_name(self, node: Node, content: bytes) -> str | None:
        """Return the identifier text of a method declaration node."""
        ...

    @abstractmethod
    def iter_method_declarations(self, root: Node) -> Iterator[Node]:
        """Iterate over every method declaration in a tree."""
        ...

    @abstractmethod
    def render_parameter(self, parameter: ParameterSymbol, rendered_type: str) -> str:
        """Render a parameter declaration from its symbol and rendered type."""
        ...

    @abstractmethod
    def method_type_parameters(self, node: Node, content: bytes) -> str:
        """Return the type-parameter clause of a method declaration, or an empty string."""
        ...

    @abstractmethod
    def rewrite_method_declaration(
        self,
        node: Node,
        content: bytes,
        parameters: Sequence[str],
        return_type: str,
        type_parameters: str | None = None,
    ) -> str:
        """Rebuild a method declaration with a new signature.

        Everything outside the replaced regions is preserved verbatim.

        Args:
            node: The method declaration node
            content: Source content of the document holding the node
            parameters: Rendered parameter declarations
            return_type: Rendered return type
            type_parameters: New type-parameter clause; None keeps the
                existing one, an empty string removes it

        Returns:
            The text of the new declaration
        """
        ...
