"""Business services for sigsync."""

from sigsync.services.check_service import CheckResult, CheckService
from sigsync.services.fix_service import AppliedFix, DocumentChange, FixResult, FixService

__all__ = [
    "AppliedFix",
    "CheckResult",
    "CheckService",
    "DocumentChange",
    "FixResult",
    "FixService",
]
