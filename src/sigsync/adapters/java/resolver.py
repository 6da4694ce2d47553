"""Java resolver for Phase 2 symbol resolution.

Builds fully resolved type symbols: the interfaces each type lists, and the
members it declares with resolved parameter and return types.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from tree_sitter import Node, Parser

from sigsync.adapters.base import FileContext, SymbolTable
from sigsync.adapters.java.ast_utils import TYPE_BODIES, TYPE_DECLARATIONS, JavaAstUtils
from sigsync.adapters.java.type_refs import JavaTypeRefBuilder
from sigsync.core.models import (
    FieldSymbol,
    MethodSymbol,
    NestedTypeSymbol,
    ParameterSymbol,
    SourceLocation,
    TypeKind,
    TypeSymbol,
)

if TYPE_CHECKING:
    from sigsync.workspace.project import Document, Project

logger = logging.getLogger(__name__)


def make_location(document: Document, node: Node) -> SourceLocation:
    """Build the source location of a node (typically a name identifier)."""
    row, column = node.start_point
    return SourceLocation(
        document_id=document.id,
        path=str(document.path),
        start_byte=node.start_byte,
        end_byte=node.end_byte,
        line=row + 1,
        column=column + 1,
    )


class JavaResolver:
    """Phase 2: Resolve type symbols using the Phase 1 type name map."""

    def __init__(self, parser: Parser, nullable_annotations: Iterable[str]) -> None:
        """Initialize the resolver.

        Args:
            parser: Configured tree-sitter parser for Java
            nullable_annotations: Simple names of nullability annotations
        """
        self._parser = parser
        self._nullable_annotations = frozenset(nullable_annotations)

    def resolve_project(self, project: Project, symbol_table: SymbolTable) -> SymbolTable:
        """Resolve every document's type declarations into the symbol table."""
        for document in project:
            try:
                self._process_document(document, symbol_table)
            except Exception as e:
                logger.warning(f"Failed to process {document.path}: {e}")

        return symbol_table

    def _process_document(self, document: Document, symbol_table: SymbolTable) -> None:
        content = document.content
        tree = self._parser.parse(content)
        root = tree.root_node

        package_name = JavaAstUtils.extract_package(root, content)
        imports = JavaAstUtils.extract_imports(root, content)
        file_context = FileContext(package=package_name, imports=imports)
        type_refs = JavaTypeRefBuilder(content, file_context, symbol_table)

        self._process_type_declarations(
            root, document, package_name, type_refs, symbol_table
        )

    def _process_type_declarations(
        self,
        node: Node,
        document: Document,
        package_name: str,
        type_refs: JavaTypeRefBuilder,
        symbol_table: SymbolTable,
        parent_qualified: str | None = None,
    ) -> None:
        content = document.content
        for child in node.children:
            if child.type not in TYPE_DECLARATIONS:
                continue
            name_node = child.child_by_field_name("name")
            if name_node is None:
                continue

            type_name = JavaAstUtils.get_node_text(name_node, content)
            if parent_qualified:
                qualified_name = f"{parent_qualified}.{type_name}"
            elif package_name:
                qualified_name = f"{package_name}.{type_name}"
            else:
                qualified_name = type_name

            members: list[MethodSymbol | FieldSymbol | NestedTypeSymbol] = []
            body_node = child.child_by_field_name("body")
            if body_node:
                members = self._collect_members(
                    body_node, document, qualified_name, type_refs
                )

            symbol_table.add_type_symbol(
                TypeSymbol(
                    name=type_name,
                    qualified_name=qualified_name,
                    kind=JavaAstUtils.get_type_kind(child.type),
                    interfaces=tuple(self._resolve_interfaces(child, content, type_refs)),
                    members=tuple(members),
                    locations=(make_location(document, name_node),),
                )
            )

            if body_node:
                # Enum bodies nest their members one level deeper
                for container in (body_node, *body_node.named_children):
                    if container.type in TYPE_BODIES:
                        self._process_type_declarations(
                            container, document, package_name, type_refs,
                            symbol_table, qualified_name,
                        )

    def _resolve_interfaces(
        self, type_node: Node, content: bytes, type_refs: JavaTypeRefBuilder
    ) -> list[str]:
        """Resolve the directly listed interfaces of a type.

        Classes, enums and records list them in ``implements``; an interface's
        ``extends`` list names super-interfaces, which are not implementations
        and are not collected.
        """
        if JavaAstUtils.get_type_kind(type_node.type) == TypeKind.INTERFACE:
            return []

        interfaces: list[str] = []
        for child in type_node.children:
            if child.type != "super_interfaces":
                continue
            for type_list in child.named_children:
                if type_list.type != "type_list":
                    continue
                for type_ref in type_list.named_children:
                    type_name = JavaAstUtils.get_type_name(type_ref, content)
                    qualified = type_refs.resolve_name(type_name)
                    if qualified not in interfaces:
                        interfaces.append(qualified)
        return interfaces

    def _collect_members(
        self,
        body_node: Node,
        document: Document,
        owner_qualified_name: str,
        type_refs: JavaTypeRefBuilder,
    ) -> list[MethodSymbol | FieldSymbol | NestedTypeSymbol]:
        """Collect methods, fields and nested types in declaration order."""
        content = document.content
        members: list[MethodSymbol | FieldSymbol | NestedTypeSymbol] = []

        for child in JavaAstUtils.iter_body_members(body_node):
            if child.type == "method_declaration":
                method = self._build_method(child, document, owner_qualified_name, type_refs)
                if method is not None:
                    members.append(method)

            elif child.type in ("field_declaration", "constant_declaration"):
                type_node = child.child_by_field_name("type")
                field_type = type_refs.build(type_node) if type_node else None
                for declarator in child.children_by_field_name("declarator"):
                    name_node = declarator.child_by_field_name("name")
                    if name_node is None:
                        continue
                    members.append(
                        FieldSymbol(
                            name=JavaAstUtils.get_node_text(name_node, content),
                            containing_type=owner_qualified_name,
                            type=field_type,
                            locations=(make_location(document, name_node),),
                        )
                    )

            elif child.type in TYPE_DECLARATIONS:
                name_node = child.child_by_field_name("name")
                if name_node is None:
                    continue
                nested_name = JavaAstUtils.get_node_text(name_node, content)
                members.append(
                    NestedTypeSymbol(
                        name=nested_name,
                        containing_type=owner_qualified_name,
                        qualified_name=f"{owner_qualified_name}.{nested_name}",
                        locations=(make_location(document, name_node),),
                    )
                )

        return members

    def _build_method(
        self,
        method_node: Node,
        document: Document,
        owner_qualified_name: str,
        type_refs: JavaTypeRefBuilder,
    ) -> MethodSymbol | None:
        content = document.content
        name_node = method_node.child_by_field_name("name")
        type_node = method_node.child_by_field_name("type")
        if name_node is None or type_node is None:
            return None

        return_type = type_refs.with_extra_rank(
            type_refs.build(type_node),
            JavaAstUtils.count_dimensions(method_node.child_by_field_name("dimensions"), content),
        )

        parameters: list[ParameterSymbol] = []
        params_node = method_node.child_by_field_name("parameters")
        if params_node is not None:
            for param_node in params_node.named_children:
                if param_node.type not in ("formal_parameter", "spread_parameter"):
                    continue
                parameter = self._build_parameter(param_node, content, type_refs)
                if parameter is not None:
                    parameters.append(parameter)

        return MethodSymbol(
            name=JavaAstUtils.get_node_text(name_node, content),
            containing_type=owner_qualified_name,
            parameters=tuple(parameters),
            return_type=return_type,
            locations=(make_location(document, name_node),),
        )

    def _build_parameter(
        self, param_node: Node, content: bytes, type_refs: JavaTypeRefBuilder
    ) -> ParameterSymbol | None:
        type_node = JavaAstUtils.get_parameter_type_node(param_node)
        name_node = JavaAstUtils.get_parameter_name_node(param_node)
        if type_node is None or name_node is None:
            return None

        param_type = type_refs.build(type_node)
        if param_node.type == "spread_parameter":
            param_type = param_type.model_copy(update={"is_varargs": True})
        else:
            param_type = type_refs.with_extra_rank(
                param_type,
                JavaAstUtils.count_dimensions(param_node.child_by_field_name("dimensions"), content),
            )

        nullable_annotation = None
        for annotation in JavaAstUtils.extract_annotations(param_node):
            if JavaAstUtils.annotation_simple_name(annotation, content) in self._nullable_annotations:
                nullable_annotation = JavaAstUtils.get_node_text(annotation, content)
                break

        return ParameterSymbol(
            name=JavaAstUtils.get_node_text(name_node, content),
            type=param_type,
            nullable=nullable_annotation is not None,
            nullable_annotation=nullable_annotation,
        )
