"""Method signatures and the mismatch rule."""

from __future__ import annotations

from dataclasses import dataclass, field

from sigsync.analysis.rendering import PARAMETER_TYPE_FORMAT, TypeDisplayFormat, render_type
from sigsync.core.models import MethodSymbol, ParameterSymbol, TypeRef, TypeRefKind


@dataclass(frozen=True)
class ParameterSignature:
    """One (name, rendered type, nullability) entry of a signature."""

    name: str
    type: str
    nullable: bool
    # Annotation as written, e.g. @CheckForNull
    annotation: str | None = field(default=None, compare=False)

    def render(self) -> str:
        if not self.nullable:
            return f"{self.type} {self.name}"
        return f"{self.annotation or '@Nullable'} {self.type} {self.name}"


@dataclass(frozen=True)
class ReturnTypeSignature:
    """A rendered return type: base name plus rendered type arguments."""

    name: str
    type_arguments: tuple[str, ...] = ()

    def render(self) -> str:
        if not self.type_arguments:
            return self.name
        return f"{self.name}<{', '.join(self.type_arguments)}>"


@dataclass(frozen=True)
class MethodSignature:
    """Derived signature of a method symbol; recomputed, never mutated."""

    parameters: tuple[ParameterSignature, ...]
    return_type: ReturnTypeSignature

    @classmethod
    def from_symbol(
        cls, method: MethodSymbol, display_format: TypeDisplayFormat = PARAMETER_TYPE_FORMAT
    ) -> MethodSignature:
        return cls(
            parameters=tuple(
                ParameterSignature(
                    name=p.name,
                    type=render_type(p.type, display_format),
                    nullable=p.nullable,
                    annotation=p.nullable_annotation,
                )
                for p in method.parameters
            ),
            return_type=render_return_type(method.return_type, display_format),
        )

    def render(self, method_name: str) -> str:
        """Render as ``ReturnType name(Type a, Type b)``."""
        params = ", ".join(p.render() for p in self.parameters)
        return f"{self.return_type.render()} {method_name}({params})"


def render_return_type(
    type_ref: TypeRef, display_format: TypeDisplayFormat = PARAMETER_TYPE_FORMAT
) -> ReturnTypeSignature:
    """Split a rendered return type into its base and rendered type arguments."""
    if not type_ref.is_generic or type_ref.array_rank:
        return ReturnTypeSignature(name=render_type(type_ref, display_format))
    base = type_ref.model_copy(update={"type_arguments": ()})
    return ReturnTypeSignature(
        name=render_type(base, display_format),
        type_arguments=tuple(render_type(arg, display_format) for arg in type_ref.type_arguments),
    )


def parameter_types(method: MethodSymbol) -> tuple[TypeRef, ...]:
    """The ordered parameter types of a method (its overload identity)."""
    return tuple(p.type for p in method.parameters)


def _is_unresolved(type_ref: TypeRef) -> bool:
    return type_ref.kind == TypeRefKind.NAMED and type_ref.qualified_name == type_ref.name


def types_match(left: TypeRef, right: TypeRef) -> bool:
    """Compare two type references by identity.

    Qualified names must agree, except that a name which resolved nowhere
    (no import, not in the project) matches any type with the same simple
    name. A repaired interface does not gain imports, so its types may be
    unresolved where the implementation's are not.
    """
    if left == right:
        return True
    if (
        left.kind != right.kind
        or left.name != right.name
        or left.array_rank != right.array_rank
        or left.is_varargs != right.is_varargs
        or left.bound != right.bound
        or len(left.type_arguments) != len(right.type_arguments)
    ):
        return False
    if left.qualified_name != right.qualified_name and not (
        _is_unresolved(left) or _is_unresolved(right)
    ):
        return False
    return all(types_match(a, b) for a, b in zip(left.type_arguments, right.type_arguments))


def parameter_types_match(left: MethodSymbol, right: MethodSymbol) -> bool:
    """True when two methods take the same parameter types in the same order."""
    return len(left.parameters) == len(right.parameters) and all(
        types_match(a, b) for a, b in zip(parameter_types(left), parameter_types(right))
    )


def _has_counterpart(parameter: ParameterSymbol, candidates: tuple[ParameterSymbol, ...]) -> bool:
    return any(
        candidate.name == parameter.name
        and types_match(candidate.type, parameter.type)
        and candidate.nullable == parameter.nullable
        for candidate in candidates
    )


def signatures_mismatch(implementation: MethodSymbol, member: MethodSymbol) -> bool:
    """Decide whether an implementing method has drifted from its interface member.

    A mismatch is any of:
    - the parameter counts differ;
    - the return types differ (type identity, generic arguments included);
    - an implementing parameter has no interface parameter with the same name,
      type and nullability.

    The parameter check runs from the implementation's list outward, so a
    reordered interface list with the same entries is not a mismatch.
    """
    if len(implementation.parameters) != len(member.parameters):
        return True
    if not types_match(implementation.return_type, member.return_type):
        return True
    return not all(
        _has_counterpart(parameter, member.parameters) for parameter in implementation.parameters
    )
