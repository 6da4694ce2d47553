"""Diagnostic descriptors reported by sigsync."""

from __future__ import annotations

from dataclasses import dataclass

from sigsync.core.models import Diagnostic, Severity, SourceLocation

RULE_ID = "SIG001"
CATEGORY = "Design"


@dataclass(frozen=True)
class DiagnosticDescriptor:
    """Static description of a diagnostic rule."""

    id: str
    title: str
    message_format: str
    category: str
    severity: Severity
    description: str
    enabled_by_default: bool = True

    def create(
        self,
        location: SourceLocation,
        *arguments: str,
        containing_type: str | None = None,
        interface_type: str | None = None,
        implementation_signature: str | None = None,
        interface_signature: str | None = None,
    ) -> Diagnostic:
        """Create a diagnostic of this rule at a location."""
        return Diagnostic(
            rule_id=self.id,
            severity=self.severity,
            message=self.message_format.format(*arguments),
            location=location,
            arguments=tuple(arguments),
            containing_type=containing_type,
            interface_type=interface_type,
            implementation_signature=implementation_signature,
            interface_signature=interface_signature,
        )


SIGNATURE_MISMATCH = DiagnosticDescriptor(
    id=RULE_ID,
    title="Interface member signature drift",
    message_format="Method '{0}' does not match the signature of the interface member it implements",
    category=CATEGORY,
    severity=Severity.WARNING,
    description=(
        "The parameter list or return type of an implementing method differs "
        "from the interface member it implements."
    ),
)

SUPPORTED_DIAGNOSTICS = (SIGNATURE_MISMATCH,)
