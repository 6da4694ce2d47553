"""Type display formats and generic-aware type rendering."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from sigsync.core.models import TypeRef, TypeRefKind


class QualificationStyle(str, Enum):
    """How named types are qualified when rendered."""

    NAME_ONLY = "name_only"
    FULLY_QUALIFIED = "fully_qualified"


@dataclass(frozen=True)
class TypeDisplayFormat:
    """Immutable rendering options passed to ``render_type``.

    Attributes:
        qualification: Render simple names or fully qualified names.
        use_special_types: Render ``java.lang`` types by their simple name
            even when fully qualifying. Primitive keywords are always kept.
    """

    qualification: QualificationStyle = QualificationStyle.NAME_ONLY
    use_special_types: bool = True


# Format used to rebuild interface signatures: short names, keywords kept
PARAMETER_TYPE_FORMAT = TypeDisplayFormat()

FULLY_QUALIFIED_FORMAT = TypeDisplayFormat(
    qualification=QualificationStyle.FULLY_QUALIFIED,
    use_special_types=False,
)


def is_special_type(type_ref: TypeRef) -> bool:
    """True for primitives, void and types of the ``java.lang`` package."""
    if type_ref.kind in (TypeRefKind.PRIMITIVE, TypeRefKind.VOID):
        return True
    package, _, simple = type_ref.qualified_name.rpartition(".")
    return package == "java.lang" and simple == type_ref.name


def render_type(type_ref: TypeRef, display_format: TypeDisplayFormat = PARAMETER_TYPE_FORMAT) -> str:
    """Render a type reference.

    Generic types are rebuilt from their base name and each type argument
    rendered independently with the same format, so the result does not
    depend on how the type was spelled in source.

    Args:
        type_ref: The type to render
        display_format: Rendering options

    Returns:
        Java source text for the type
    """
    if type_ref.kind in (TypeRefKind.PRIMITIVE, TypeRefKind.VOID):
        text = type_ref.name
    elif type_ref.kind == TypeRefKind.WILDCARD:
        text = "?"
        if type_ref.bound and type_ref.type_arguments:
            text = f"? {type_ref.bound} {render_type(type_ref.type_arguments[0], display_format)}"
    else:
        text = _render_name(type_ref, display_format)
        if type_ref.type_arguments:
            arguments = ", ".join(render_type(arg, display_format) for arg in type_ref.type_arguments)
            text = f"{text}<{arguments}>"

    text += "[]" * type_ref.array_rank
    if type_ref.is_varargs:
        text += "..."
    return text


def _render_name(type_ref: TypeRef, display_format: TypeDisplayFormat) -> str:
    if display_format.qualification == QualificationStyle.NAME_ONLY:
        return type_ref.name
    if display_format.use_special_types and is_special_type(type_ref):
        return type_ref.name
    return type_ref.qualified_name
