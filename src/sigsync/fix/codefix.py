"""Code fix registration for signature mismatch diagnostics."""

from __future__ import annotations

import functools
from collections.abc import Callable
from dataclasses import dataclass

from sigsync.analysis.rules import RULE_ID
from sigsync.core.cancellation import CancellationToken
from sigsync.core.models import Diagnostic
from sigsync.fix.synchronizer import SignatureSynchronizer
from sigsync.workspace.project import Project

CODE_FIX_TITLE = "Update interface member to match implementation"
EQUIVALENCE_KEY = f"{RULE_ID}.UpdateInterfaceMember"


@dataclass(frozen=True)
class CodeFix:
    """A single offered repair.

    ``create_changed_project`` is only invoked when the fix is applied.
    """

    title: str
    equivalence_key: str
    diagnostic: Diagnostic
    create_changed_project: Callable[[Project, CancellationToken | None], Project]

    def apply(self, project: Project, cancellation: CancellationToken | None = None) -> Project:
        return self.create_changed_project(project, cancellation)


class SignatureCodeFixProvider:
    """Offers the interface update for every signature mismatch diagnostic."""

    fixable_rule_ids: tuple[str, ...] = (RULE_ID,)

    def __init__(self, synchronizer: SignatureSynchronizer) -> None:
        self._synchronizer = synchronizer

    def register_code_fixes(self, diagnostic: Diagnostic) -> list[CodeFix]:
        """Register the code fixes offered for a diagnostic.

        Args:
            diagnostic: A reported diagnostic

        Returns:
            One fix for supported rules, nothing otherwise
        """
        if diagnostic.rule_id not in self.fixable_rule_ids:
            return []
        return [
            CodeFix(
                title=CODE_FIX_TITLE,
                equivalence_key=EQUIVALENCE_KEY,
                diagnostic=diagnostic,
                create_changed_project=functools.partial(self._fix, diagnostic),
            )
        ]

    def _fix(
        self,
        diagnostic: Diagnostic,
        project: Project,
        cancellation: CancellationToken | None = None,
    ) -> Project:
        location = diagnostic.location
        return self._synchronizer.synchronize(
            project, location.document_id, location.start_byte, cancellation
        )
