"""Core module containing symbol models, configuration, serializer, and validator."""

from sigsync.core.cancellation import CancellationToken, OperationCancelledError
from sigsync.core.config import MemberMatching, SigsyncConfig, get_config, reload_config
from sigsync.core.models import (
    CheckReport,
    Diagnostic,
    FieldSymbol,
    LanguageType,
    MemberKind,
    MethodSymbol,
    NestedTypeSymbol,
    ParameterSymbol,
    Severity,
    SourceLocation,
    TypeKind,
    TypeRef,
    TypeRefKind,
    TypeSymbol,
)
from sigsync.core.serializer import (
    SerializationError,
    deserialize,
    deserialize_from_dict,
    serialize,
    serialize_to_dict,
)
from sigsync.core.validator import (
    ValidationError,
    ValidationErrorType,
    ValidationResult,
    validate_symbol_table,
)

__all__ = [
    "CancellationToken",
    "CheckReport",
    "Diagnostic",
    "FieldSymbol",
    "LanguageType",
    "MemberKind",
    "MemberMatching",
    "MethodSymbol",
    "NestedTypeSymbol",
    "OperationCancelledError",
    "ParameterSymbol",
    "SerializationError",
    "Severity",
    "SigsyncConfig",
    "SourceLocation",
    "TypeKind",
    "TypeRef",
    "TypeRefKind",
    "TypeSymbol",
    "ValidationError",
    "ValidationErrorType",
    "ValidationResult",
    "deserialize",
    "deserialize_from_dict",
    "get_config",
    "reload_config",
    "serialize",
    "serialize_to_dict",
    "validate_symbol_table",
]
