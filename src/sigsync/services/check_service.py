"""Check service for reporting signature drift.

This module provides the CheckService, which loads a project, builds its
symbol table, validates it, and runs the mismatch detector.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from sigsync.adapters import JavaAdapter, LanguageAdapter
from sigsync.analysis.detector import MismatchDetector
from sigsync.core.config import SigsyncConfig, get_config
from sigsync.core.models import CheckReport, Diagnostic
from sigsync.core.validator import validate_symbol_table
from sigsync.workspace.project import Project, ProjectLoadError

logger = logging.getLogger(__name__)


@dataclass
class CheckResult:
    """Result of a check operation."""

    root: Path
    documents_count: int = 0
    types_count: int = 0
    methods_count: int = 0
    diagnostics: list[Diagnostic] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """Check if the project could be analyzed."""
        return len(self.errors) == 0

    @property
    def has_diagnostics(self) -> bool:
        return len(self.diagnostics) > 0

    def to_report(self) -> CheckReport:
        """Build the serializable report of this result."""
        return CheckReport(
            root=str(self.root),
            diagnostics=list(self.diagnostics),
            warnings=list(self.warnings),
        )


class CheckService:
    """Service for detecting interface signature drift in a project."""

    def __init__(
        self,
        config: SigsyncConfig | None = None,
        adapter: LanguageAdapter | None = None,
    ) -> None:
        """Initialize check service.

        Args:
            config: Configuration (defaults to the global configuration).
            adapter: Language adapter (defaults to a Java adapter).
        """
        self._config = config or get_config()
        self._adapter = adapter or JavaAdapter(self._config)
        self._detector = MismatchDetector(self._config)

    def check(self, path: Path) -> CheckResult:
        """Check every implementing method under a project root.

        Args:
            path: Root directory of the project.

        Returns:
            CheckResult with counts, diagnostics, warnings and errors.
        """
        result = CheckResult(root=path)

        try:
            project = Project.load(path, self._config)
        except ProjectLoadError as e:
            result.errors.append(str(e))
            return result

        result.root = project.root
        return self.check_project(project, result)

    def check_project(self, project: Project, result: CheckResult | None = None) -> CheckResult:
        """Check an already loaded project snapshot.

        Args:
            project: The project snapshot.
            result: Result to fill in (a new one by default).

        Returns:
            CheckResult with counts, diagnostics, warnings and errors.
        """
        result = result or CheckResult(root=project.root)
        result.documents_count = len(project)

        if not project.documents:
            result.warnings.append(
                f"No .{self._config.source_extension} files found under {project.root}"
            )
            return result

        symbol_table = self._adapter.build_symbol_table(project)
        result.types_count = len(symbol_table.types)
        result.methods_count = sum(1 for _ in symbol_table.iter_methods())

        validation = validate_symbol_table(symbol_table)
        result.warnings.extend(validation.messages)

        result.diagnostics = self._detector.detect_all(symbol_table)
        logger.info(
            f"Checked {result.documents_count} documents: "
            f"{len(result.diagnostics)} signature mismatches"
        )
        return result
