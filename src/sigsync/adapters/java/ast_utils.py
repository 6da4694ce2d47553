"""Java AST utility functions.

This module provides utility functions for extracting information
from tree-sitter AST nodes for Java source code.
"""

from __future__ import annotations

from collections.abc import Iterator

from tree_sitter import Node

from sigsync.core.models import TypeKind

TYPE_DECLARATIONS = (
    "class_declaration",
    "interface_declaration",
    "enum_declaration",
    "record_declaration",
)

TYPE_BODIES = ("class_body", "interface_body", "enum_body", "enum_body_declarations")

TYPE_NODES = (
    "integral_type",
    "floating_point_type",
    "boolean_type",
    "void_type",
    "type_identifier",
    "scoped_type_identifier",
    "generic_type",
    "array_type",
    "annotated_type",
)


class JavaAstUtils:
    """Java AST utility functions for tree-sitter nodes."""

    @staticmethod
    def get_node_text(node: Node, content: bytes) -> str:
        """Get the text content of a node.

        Args:
            node: The AST node
            content: Source file content

        Returns:
            The text content of the node
        """
        return content[node.start_byte:node.end_byte].decode("utf-8")

    @staticmethod
    def get_type_name(type_node: Node, content: bytes) -> str:
        """Extract type name from a type node.

        Args:
            type_node: The type AST node
            content: Source file content

        Returns:
            Type name without generic arguments
        """
        if type_node.type == "generic_type":
            for child in type_node.children:
                if child.type in ("type_identifier", "scoped_type_identifier"):
                    return JavaAstUtils.get_node_text(child, content)
        elif type_node.type == "array_type":
            element_type = type_node.child_by_field_name("element")
            if element_type:
                return JavaAstUtils.get_type_name(element_type, content) + "[]"
        elif type_node.type == "void_type":
            return "void"

        return JavaAstUtils.get_node_text(type_node, content)

    @staticmethod
    def extract_package(root: Node, content: bytes) -> str:
        """Extract package name from the AST.

        Args:
            root: Root node of the AST
            content: Source file content

        Returns:
            Package name or empty string if no package declaration
        """
        for child in root.children:
            if child.type == "package_declaration":
                for node in child.children:
                    if node.type in ("scoped_identifier", "identifier"):
                        return JavaAstUtils.get_node_text(node, content)
        return ""

    @staticmethod
    def extract_imports(root: Node, content: bytes) -> list[str]:
        """Extract import statements from the AST.

        Static imports are skipped: they import members, not types.

        Args:
            root: Root node of the AST
            content: Source file content

        Returns:
            List of import statements
        """
        imports: list[str] = []
        for child in root.children:
            if child.type == "import_declaration":
                if any(c.type == "static" for c in child.children):
                    continue
                for node in child.children:
                    if node.type in ("scoped_identifier", "identifier"):
                        import_text = JavaAstUtils.get_node_text(node, content)
                        if any(c.type == "asterisk" for c in child.children):
                            import_text += ".*"
                        imports.append(import_text)
                        break
        return imports

    @staticmethod
    def get_type_kind(node_type: str) -> TypeKind:
        """Map AST node type to TypeKind.

        Args:
            node_type: The AST node type string

        Returns:
            Corresponding TypeKind enum value
        """
        mapping = {
            "class_declaration": TypeKind.CLASS,
            "interface_declaration": TypeKind.INTERFACE,
            "enum_declaration": TypeKind.ENUM,
            "record_declaration": TypeKind.RECORD,
        }
        return mapping.get(node_type, TypeKind.CLASS)

    @staticmethod
    def iter_body_members(body_node: Node) -> Iterator[Node]:
        """Iterate over the member declarations of a type body.

        Enum bodies keep their methods in a nested ``enum_body_declarations``
        node, which is flattened here.
        """
        for child in body_node.children:
            if child.type == "enum_body_declarations":
                yield from JavaAstUtils.iter_body_members(child)
            else:
                yield child

    @staticmethod
    def find_ancestor(node: Node | None, node_type: str) -> Node | None:
        """Climb from a node (inclusive) to the nearest ancestor of a given type."""
        while node is not None and node.type != node_type:
            node = node.parent
        return node

    @staticmethod
    def find_child(node: Node, node_type: str) -> Node | None:
        """Get the first direct child of a given type."""
        for child in node.children:
            if child.type == node_type:
                return child
        return None

    @staticmethod
    def iter_descendants(root: Node, node_type: str) -> Iterator[Node]:
        """Iterate depth-first, in source order, over descendants of a given type."""
        stack = [root]
        while stack:
            node = stack.pop()
            if node.type == node_type:
                yield node
            stack.extend(reversed(node.children))

    @staticmethod
    def annotation_simple_name(annotation_node: Node, content: bytes) -> str | None:
        """Get the simple name of a marker or normal annotation.

        ``@javax.annotation.Nullable`` yields ``Nullable``.
        """
        name_node = annotation_node.child_by_field_name("name")
        if name_node is None:
            return None
        return JavaAstUtils.get_node_text(name_node, content).rsplit(".", 1)[-1]

    @staticmethod
    def extract_annotations(declaration_node: Node) -> list[Node]:
        """Get the annotation nodes in a declaration's modifiers."""
        annotations: list[Node] = []
        for child in declaration_node.children:
            if child.type == "modifiers":
                for mod in child.children:
                    if mod.type in ("marker_annotation", "annotation"):
                        annotations.append(mod)
        return annotations

    @staticmethod
    def get_parameter_type_node(parameter_node: Node) -> Node | None:
        """Get the type node of a formal or spread parameter.

        ``spread_parameter`` has no 'type' field; its type is a direct child.
        """
        type_node = parameter_node.child_by_field_name("type")
        if type_node is not None:
            return type_node
        for child in parameter_node.children:
            if child.type in TYPE_NODES:
                return child
        return None

    @staticmethod
    def get_parameter_name_node(parameter_node: Node) -> Node | None:
        """Get the name identifier of a formal or spread parameter."""
        name_node = parameter_node.child_by_field_name("name")
        if name_node is not None:
            return name_node
        for child in parameter_node.children:
            if child.type == "variable_declarator":
                return child.child_by_field_name("name")
        return None

    @staticmethod
    def count_dimensions(dimensions_node: Node | None, content: bytes) -> int:
        """Count the ``[]`` pairs in a dimensions node."""
        if dimensions_node is None:
            return 0
        return JavaAstUtils.get_node_text(dimensions_node, content).count("[")
