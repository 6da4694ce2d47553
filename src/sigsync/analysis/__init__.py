"""Signature drift analysis: matching, comparison and detection."""

from sigsync.analysis.detector import MismatchDetector
from sigsync.analysis.matching import ImplementationPair, find_interface_member
from sigsync.analysis.rendering import (
    FULLY_QUALIFIED_FORMAT,
    PARAMETER_TYPE_FORMAT,
    QualificationStyle,
    TypeDisplayFormat,
    render_type,
)
from sigsync.analysis.rules import RULE_ID, SIGNATURE_MISMATCH, DiagnosticDescriptor
from sigsync.analysis.signature import (
    MethodSignature,
    parameter_types_match,
    signatures_mismatch,
    types_match,
)

__all__ = [
    "DiagnosticDescriptor",
    "FULLY_QUALIFIED_FORMAT",
    "ImplementationPair",
    "MethodSignature",
    "MismatchDetector",
    "PARAMETER_TYPE_FORMAT",
    "QualificationStyle",
    "RULE_ID",
    "SIGNATURE_MISMATCH",
    "TypeDisplayFormat",
    "find_interface_member",
    "render_type",
    "parameter_types_match",
    "signatures_mismatch",
    "types_match",
]
