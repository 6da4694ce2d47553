"""Build resolved TypeRefs from Java type nodes."""

from __future__ import annotations

from tree_sitter import Node

from sigsync.adapters.base import FileContext, SymbolTable
from sigsync.adapters.java.ast_utils import TYPE_NODES, JavaAstUtils
from sigsync.core.models import TypeRef, TypeRefKind

# Public top-level types of java.lang, visible in every compilation unit
# without an import. A name missing here stays unresolved and then matches
# any type with the same simple name.
JAVA_LANG_TYPES = frozenset({
    # Interfaces
    "Appendable", "AutoCloseable", "CharSequence", "Cloneable", "Comparable",
    "Iterable", "Readable", "Runnable",
    # Classes
    "Boolean", "Byte", "Character", "Class", "ClassLoader", "ClassValue",
    "Double", "Enum", "Float", "InheritableThreadLocal", "Integer", "Long",
    "Math", "Module", "ModuleLayer", "Number", "Object", "Package", "Process",
    "ProcessBuilder", "Record", "Runtime", "SecurityManager", "Short",
    "StackTraceElement", "StackWalker", "StrictMath", "String", "StringBuffer",
    "StringBuilder", "System", "Thread", "ThreadGroup", "ThreadLocal",
    "Throwable", "Void",
    # Exceptions
    "ArithmeticException", "ArrayIndexOutOfBoundsException",
    "ArrayStoreException", "ClassCastException", "ClassNotFoundException",
    "CloneNotSupportedException", "EnumConstantNotPresentException",
    "Exception", "IllegalAccessException", "IllegalArgumentException",
    "IllegalCallerException", "IllegalMonitorStateException",
    "IllegalStateException", "IllegalThreadStateException",
    "IndexOutOfBoundsException", "InstantiationException",
    "InterruptedException", "NegativeArraySizeException",
    "NoSuchFieldException", "NoSuchMethodException", "NullPointerException",
    "NumberFormatException", "ReflectiveOperationException",
    "RuntimeException", "SecurityException",
    "StringIndexOutOfBoundsException", "TypeNotPresentException",
    "UnsupportedOperationException",
    # Errors
    "AbstractMethodError", "AssertionError", "BootstrapMethodError",
    "ClassCircularityError", "ClassFormatError", "Error",
    "ExceptionInInitializerError", "IllegalAccessError",
    "IncompatibleClassChangeError", "InstantiationError", "InternalError",
    "LinkageError", "NoClassDefFoundError", "NoSuchFieldError",
    "NoSuchMethodError", "OutOfMemoryError", "StackOverflowError",
    "UnknownError", "UnsatisfiedLinkError", "UnsupportedClassVersionError",
    "VerifyError", "VirtualMachineError",
    # Annotations
    "Deprecated", "FunctionalInterface", "Override", "SafeVarargs",
    "SuppressWarnings",
})

PRIMITIVE_NODES = ("integral_type", "floating_point_type", "boolean_type")


class JavaTypeRefBuilder:
    """Turn type nodes of one file into spelling-independent TypeRefs.

    Short names are qualified through, in order, the project symbol table
    (local aliases, same package, explicit and wildcard imports), explicit
    imports of types outside the project, and ``java.lang``. Names that
    resolve nowhere (type variables, unknown library types) keep their
    simple name as qualified name.
    """

    def __init__(self, content: bytes, context: FileContext, symbol_table: SymbolTable) -> None:
        self._content = content
        self._context = context
        self._symbol_table = symbol_table

    def build(self, type_node: Node) -> TypeRef:
        """Build a TypeRef for a type node.

        Args:
            type_node: Any Java type node (primitive, named, generic, array, ...)

        Returns:
            The resolved type reference
        """
        node_type = type_node.type
        if node_type in PRIMITIVE_NODES:
            text = JavaAstUtils.get_node_text(type_node, self._content)
            return TypeRef(kind=TypeRefKind.PRIMITIVE, name=text, qualified_name=text)
        if node_type == "void_type":
            return TypeRef(kind=TypeRefKind.VOID, name="void", qualified_name="void")
        if node_type == "array_type":
            element = self.build(type_node.child_by_field_name("element"))
            rank = JavaAstUtils.count_dimensions(
                type_node.child_by_field_name("dimensions"), self._content
            )
            return element.model_copy(update={"array_rank": element.array_rank + rank})
        if node_type == "generic_type":
            return self._build_generic(type_node)
        if node_type == "annotated_type":
            # Type-use annotations do not change type identity
            inner = [c for c in type_node.named_children if c.type not in (
                "marker_annotation", "annotation"
            )]
            return self.build(inner[-1])
        if node_type == "wildcard":
            return self._build_wildcard(type_node)
        return self._build_named(JavaAstUtils.get_node_text(type_node, self._content))

    def with_extra_rank(self, type_ref: TypeRef, rank: int) -> TypeRef:
        """Add C-style declarator dimensions (``String args[]``) to a type."""
        if rank == 0:
            return type_ref
        return type_ref.model_copy(update={"array_rank": type_ref.array_rank + rank})

    def resolve_name(self, written_name: str) -> str:
        """Qualify a (possibly dotted) type name as written in source."""
        written_name = "".join(written_name.split())
        head, _, rest = written_name.partition(".")
        resolved_head = self._resolve_simple(head)
        if rest:
            if resolved_head is not None:
                return f"{resolved_head}.{rest}"
            # Already package-qualified
            return written_name
        return resolved_head or written_name

    def _build_named(self, written_name: str) -> TypeRef:
        written_name = "".join(written_name.split())
        return TypeRef(
            name=written_name.rsplit(".", 1)[-1],
            qualified_name=self.resolve_name(written_name),
        )

    def _build_generic(self, type_node: Node) -> TypeRef:
        base: TypeRef | None = None
        arguments: list[TypeRef] = []
        for child in type_node.named_children:
            if child.type in ("type_identifier", "scoped_type_identifier"):
                base = self._build_named(JavaAstUtils.get_node_text(child, self._content))
            elif child.type == "type_arguments":
                arguments = [self.build(arg) for arg in child.named_children
                             if arg.type not in ("marker_annotation", "annotation")]
        if base is None:
            base = self._build_named(JavaAstUtils.get_type_name(type_node, self._content))
        return base.model_copy(update={"type_arguments": tuple(arguments)})

    def _build_wildcard(self, type_node: Node) -> TypeRef:
        bound: str | None = None
        bound_type: TypeRef | None = None
        for child in type_node.children:
            if child.type in ("extends", "super"):
                bound = child.type
            elif child.type in TYPE_NODES:
                bound_type = self.build(child)
        if bound is None or bound_type is None:
            return TypeRef(kind=TypeRefKind.WILDCARD, name="?", qualified_name="?")
        return TypeRef(
            kind=TypeRefKind.WILDCARD,
            name="?",
            qualified_name="?",
            bound=bound,
            type_arguments=(bound_type,),
        )

    def _resolve_simple(self, short_name: str) -> str | None:
        resolved = self._symbol_table.resolve_type(short_name, self._context)
        if resolved:
            return resolved
        for imp in self._context.imports:
            if imp.endswith(f".{short_name}"):
                return imp
        if short_name in JAVA_LANG_TYPES:
            return f"java.lang.{short_name}"
        return None
