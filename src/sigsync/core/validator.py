"""Symbol table validation module.

This module reports inconsistencies in a built symbol table that limit what
the detector can see. None of them stop a check; they are surfaced as
warnings next to the diagnostics.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sigsync.adapters.base import SymbolTable


class ValidationErrorType(str, Enum):
    """Types of validation errors."""

    UNRESOLVED_INTERFACE = "unresolved_interface"
    DUPLICATE_TYPE = "duplicate_type"
    NON_INTERFACE_IMPLEMENTED = "non_interface_implemented"


@dataclass
class ValidationError:
    """A single validation error."""

    error_type: ValidationErrorType
    type_name: str
    invalid_ref: str
    message: str


@dataclass
class ValidationResult:
    """Result of symbol table validation."""

    is_valid: bool
    errors: list[ValidationError] = field(default_factory=list)

    def add_error(
        self,
        error_type: ValidationErrorType,
        type_name: str,
        invalid_ref: str,
        message: str,
    ) -> None:
        """Add a validation error."""
        self.errors.append(
            ValidationError(
                error_type=error_type,
                type_name=type_name,
                invalid_ref=invalid_ref,
                message=message,
            )
        )
        self.is_valid = False

    @property
    def messages(self) -> list[str]:
        return [error.message for error in self.errors]


def validate_symbol_table(symbol_table: SymbolTable) -> ValidationResult:
    """Validate a symbol table for interface reference integrity.

    Checks that every listed interface is declared in the project and is an
    interface, and that no type is declared more than once.

    Args:
        symbol_table: The symbol table to validate.

    Returns:
        ValidationResult containing validation status and any errors found.
    """
    result = ValidationResult(is_valid=True)

    for qualified_name in sorted(symbol_table.types):
        type_symbol = symbol_table.types[qualified_name]

        if len(type_symbol.locations) > 1:
            paths = ", ".join(location.path for location in type_symbol.locations)
            result.add_error(
                error_type=ValidationErrorType.DUPLICATE_TYPE,
                type_name=qualified_name,
                invalid_ref=qualified_name,
                message=f"Type '{qualified_name}' is declared more than once ({paths})",
            )

        for interface_name in type_symbol.interfaces:
            interface = symbol_table.get_type(interface_name)
            if interface is None:
                result.add_error(
                    error_type=ValidationErrorType.UNRESOLVED_INTERFACE,
                    type_name=qualified_name,
                    invalid_ref=interface_name,
                    message=f"Type '{qualified_name}' implements '{interface_name}', "
                    f"which is not declared in the project",
                )
            elif not interface.is_interface:
                result.add_error(
                    error_type=ValidationErrorType.NON_INTERFACE_IMPLEMENTED,
                    type_name=qualified_name,
                    invalid_ref=interface_name,
                    message=f"Type '{qualified_name}' implements '{interface_name}', "
                    f"which is a {interface.kind.value.lower()}",
                )

    return result
