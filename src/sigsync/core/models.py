"""Symbol and diagnostic models for sigsync.

This module defines the read-only views the analysis works on: resolved
type references, type and member symbols, source locations, and the
diagnostics the mismatch detector reports.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class LanguageType(str, Enum):
    """Supported programming languages."""

    JAVA = "java"


class TypeKind(str, Enum):
    """Kind of type definition."""

    CLASS = "CLASS"
    INTERFACE = "INTERFACE"
    ENUM = "ENUM"
    RECORD = "RECORD"


class MemberKind(str, Enum):
    """Kind of type member."""

    METHOD = "METHOD"
    FIELD = "FIELD"
    TYPE = "TYPE"


class TypeRefKind(str, Enum):
    """Kind of type reference."""

    PRIMITIVE = "PRIMITIVE"
    VOID = "VOID"
    NAMED = "NAMED"
    WILDCARD = "WILDCARD"


class Severity(str, Enum):
    """Diagnostic severity."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class FrozenModel(BaseModel):
    """Base class for immutable models."""

    model_config = ConfigDict(frozen=True)


class SourceLocation(FrozenModel):
    """Position of a declaration's name in a document."""

    document_id: str = Field(..., description="Owning document ID")
    path: str = Field(..., description="Absolute file path of the document")
    start_byte: int = Field(..., ge=0)
    end_byte: int = Field(..., ge=0)
    line: int = Field(..., ge=1, description="1-based line")
    column: int = Field(..., ge=1, description="1-based column")


class TypeRef(FrozenModel):
    """Resolved type reference.

    Identity is independent of how the type was spelled in source:
    ``java.util.List<Integer>`` and an imported ``List<Integer>`` compare equal.
    """

    kind: TypeRefKind = TypeRefKind.NAMED
    name: str = Field(..., description="Simple name (e.g. 'List', 'int', '?')")
    qualified_name: str = Field(..., description="Fully qualified name when resolvable")
    type_arguments: tuple[TypeRef, ...] = ()
    array_rank: int = Field(default=0, ge=0)
    is_varargs: bool = False
    bound: Literal["extends", "super"] | None = Field(
        default=None, description="Wildcard bound keyword; the bound is type_arguments[0]"
    )

    @property
    def is_generic(self) -> bool:
        """True for named types with type arguments."""
        return self.kind == TypeRefKind.NAMED and len(self.type_arguments) > 0


class ParameterSymbol(FrozenModel):
    """A method parameter."""

    name: str
    type: TypeRef
    nullable: bool = False
    nullable_annotation: str | None = Field(
        default=None, description="Nullability annotation as written (e.g. '@Nullable')"
    )


class MethodSymbol(FrozenModel):
    """A method declared by a type."""

    kind: Literal[MemberKind.METHOD] = MemberKind.METHOD
    name: str
    containing_type: str = Field(..., description="Qualified name of the declaring type")
    parameters: tuple[ParameterSymbol, ...] = ()
    return_type: TypeRef
    locations: tuple[SourceLocation, ...] = ()

    @property
    def qualified_name(self) -> str:
        return f"{self.containing_type}.{self.name}"


class FieldSymbol(FrozenModel):
    """A field or interface constant."""

    kind: Literal[MemberKind.FIELD] = MemberKind.FIELD
    name: str
    containing_type: str
    type: TypeRef | None = None
    locations: tuple[SourceLocation, ...] = ()


class NestedTypeSymbol(FrozenModel):
    """A type declared inside another type, seen as a member."""

    kind: Literal[MemberKind.TYPE] = MemberKind.TYPE
    name: str
    containing_type: str
    qualified_name: str
    locations: tuple[SourceLocation, ...] = ()


MemberSymbol = Annotated[
    Union[MethodSymbol, FieldSymbol, NestedTypeSymbol],
    Field(discriminator="kind"),
]


class TypeSymbol(FrozenModel):
    """Type definition representation.

    Duplicate declarations of one qualified name across documents are merged
    into a single symbol with several locations.
    """

    name: str
    qualified_name: str
    kind: TypeKind
    interfaces: tuple[str, ...] = Field(
        default=(), description="Directly listed interfaces (qualified names, source order)"
    )
    members: tuple[MemberSymbol, ...] = ()
    locations: tuple[SourceLocation, ...] = ()

    @property
    def is_interface(self) -> bool:
        return self.kind == TypeKind.INTERFACE

    @property
    def methods(self) -> list[MethodSymbol]:
        return [m for m in self.members if isinstance(m, MethodSymbol)]


class Diagnostic(FrozenModel):
    """A reported signature mismatch."""

    rule_id: str
    severity: Severity
    message: str
    location: SourceLocation
    arguments: tuple[str, ...] = ()
    containing_type: str | None = Field(
        default=None, description="Qualified name of the implementing type"
    )
    interface_type: str | None = Field(
        default=None, description="Qualified name of the interface declaring the member"
    )
    implementation_signature: str | None = None
    interface_signature: str | None = None


class CheckReport(BaseModel):
    """Serializable result of a check run."""

    version: str = "1.0"
    root: str
    diagnostics: list[Diagnostic] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
