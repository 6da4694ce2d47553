"""Fix service for repairing interface signatures.

This module provides the FixService, which repeatedly detects signature
mismatches and applies the offered code fix until none is left to try.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from sigsync.adapters import JavaAdapter, LanguageAdapter
from sigsync.analysis.detector import MismatchDetector
from sigsync.core.cancellation import CancellationToken
from sigsync.core.config import SigsyncConfig, get_config
from sigsync.core.models import Diagnostic
from sigsync.fix.codefix import SignatureCodeFixProvider
from sigsync.fix.synchronizer import SignatureSynchronizer
from sigsync.workspace.edits import commit
from sigsync.workspace.project import Project, ProjectLoadError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppliedFix:
    """A repair that changed the project."""

    method: str
    interface: str | None
    old_signature: str | None
    new_signature: str | None
    paths: tuple[Path, ...]


@dataclass(frozen=True)
class DocumentChange:
    """Content of one document before and after a fix run."""

    path: Path
    original: str
    updated: str


@dataclass
class FixResult:
    """Result of a fix operation."""

    root: Path
    dry_run: bool = False
    passes: int = 0
    applied: list[AppliedFix] = field(default_factory=list)
    skipped: list[Diagnostic] = field(default_factory=list)
    remaining: list[Diagnostic] = field(default_factory=list)
    changes: list[DocumentChange] = field(default_factory=list)
    written_files: list[Path] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """Check if the fix run completed without errors."""
        return len(self.errors) == 0


def _member_key(diagnostic: Diagnostic) -> tuple[str | None, str | None]:
    return (
        diagnostic.interface_type,
        diagnostic.arguments[0] if diagnostic.arguments else None,
    )


def _diagnostic_key(diagnostic: Diagnostic) -> tuple[str | None, ...]:
    # Offsets move as documents are rewritten, so identify a diagnostic by
    # what it is about rather than where it is.
    return (
        diagnostic.location.path,
        diagnostic.containing_type,
        diagnostic.interface_type,
        diagnostic.arguments[0] if diagnostic.arguments else None,
        diagnostic.implementation_signature,
    )


class FixService:
    """Service for applying signature repairs across a project.

    Every repair changes the symbol table, so detection is rerun after each
    one. Each diagnostic is attempted at most once; a repair that leaves the
    project unchanged is recorded as skipped. An interface member is
    rewritten at most once per run, so implementations that disagree with
    the first repaired one are skipped and stay in ``remaining``.
    """

    def __init__(
        self,
        config: SigsyncConfig | None = None,
        adapter: LanguageAdapter | None = None,
    ) -> None:
        """Initialize fix service.

        Args:
            config: Configuration (defaults to the global configuration).
            adapter: Language adapter (defaults to a Java adapter).
        """
        self._config = config or get_config()
        self._adapter = adapter or JavaAdapter(self._config)
        self._detector = MismatchDetector(self._config)
        self._provider = SignatureCodeFixProvider(
            SignatureSynchronizer(self._adapter, self._config)
        )

    def fix(
        self,
        path: Path,
        dry_run: bool = False,
        method: str | None = None,
        cancellation: CancellationToken | None = None,
    ) -> FixResult:
        """Repair interface members under a project root.

        Args:
            path: Root directory of the project.
            dry_run: If True, compute the repairs without writing files.
            method: Only repair mismatches of methods with this name.
            cancellation: Optional cancellation token.

        Returns:
            FixResult describing applied, skipped and remaining mismatches.
        """
        result = FixResult(root=path, dry_run=dry_run)

        try:
            baseline = Project.load(path, self._config)
        except ProjectLoadError as e:
            result.errors.append(str(e))
            return result

        result.root = baseline.root
        project = self.fix_project(baseline, result, method, cancellation)

        for document in project.changed_documents(baseline):
            result.changes.append(
                DocumentChange(
                    path=document.path,
                    original=baseline.get_document(document.id).text,
                    updated=document.text,
                )
            )

        if not dry_run:
            try:
                result.written_files = commit(baseline, project)
            except OSError as e:
                result.errors.append(f"Error writing files: {e}")

        return result

    def fix_project(
        self,
        project: Project,
        result: FixResult,
        method: str | None = None,
        cancellation: CancellationToken | None = None,
    ) -> Project:
        """Run the detect and repair loop on a project snapshot.

        Args:
            project: The snapshot to repair.
            result: Result collecting applied and skipped repairs.
            method: Only repair mismatches of methods with this name.
            cancellation: Optional cancellation token.

        Returns:
            The repaired snapshot.
        """
        attempted: set[tuple[str | None, ...]] = set()
        # Interface members already rewritten in this run; the first
        # implementation to reach a member wins
        rewritten: set[tuple[str | None, str | None]] = set()

        while result.passes < self._config.max_fix_passes:
            diagnostics = self._detect(project, method)
            pending = [d for d in diagnostics if _diagnostic_key(d) not in attempted]
            if not pending:
                result.remaining = diagnostics
                return project

            diagnostic = pending[0]
            attempted.add(_diagnostic_key(diagnostic))
            if _member_key(diagnostic) in rewritten:
                logger.info(
                    f"Not repairing {diagnostic.containing_type}: "
                    f"{diagnostic.interface_type} was already updated for another implementation"
                )
                result.skipped.append(diagnostic)
                continue

            result.passes += 1

            updated = project
            for code_fix in self._provider.register_code_fixes(diagnostic):
                updated = code_fix.apply(updated, cancellation)

            changed = updated.changed_documents(project)
            if not changed:
                logger.info(f"No repair available for {diagnostic.message}")
                result.skipped.append(diagnostic)
                continue

            result.applied.append(
                AppliedFix(
                    method=f"{diagnostic.containing_type}.{diagnostic.arguments[0]}"
                    if diagnostic.arguments
                    else str(diagnostic.containing_type),
                    interface=diagnostic.interface_type,
                    old_signature=diagnostic.interface_signature,
                    new_signature=diagnostic.implementation_signature,
                    paths=tuple(document.path for document in changed),
                )
            )
            rewritten.add(_member_key(diagnostic))
            project = updated

        logger.warning(f"Stopped after {result.passes} repair passes")
        result.remaining = self._detect(project, method)
        return project

    def _detect(self, project: Project, method: str | None) -> list[Diagnostic]:
        symbol_table = self._adapter.build_symbol_table(project)
        diagnostics = self._detector.detect_all(symbol_table)
        if method is not None:
            diagnostics = [d for d in diagnostics if d.arguments and d.arguments[0] == method]
        return diagnostics
