"""Interface signature repair."""

from sigsync.fix.codefix import (
    CODE_FIX_TITLE,
    EQUIVALENCE_KEY,
    CodeFix,
    SignatureCodeFixProvider,
)
from sigsync.fix.document_resolution import (
    DEFAULT_STRATEGIES,
    DocumentResolver,
    ResolutionStrategy,
    ResolvedDocument,
)
from sigsync.fix.reconcile import reconcile_parameters
from sigsync.fix.synchronizer import DeclarationSite, SignatureSynchronizer

__all__ = [
    "CODE_FIX_TITLE",
    "CodeFix",
    "DEFAULT_STRATEGIES",
    "DeclarationSite",
    "DocumentResolver",
    "EQUIVALENCE_KEY",
    "ResolutionStrategy",
    "ResolvedDocument",
    "SignatureCodeFixProvider",
    "SignatureSynchronizer",
    "reconcile_parameters",
]
