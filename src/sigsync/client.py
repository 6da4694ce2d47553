"""Public client interface for sigsync.

sigsync already exposes lower-level building blocks (analysis/, fix/ and
services/). This module provides a stable, ergonomic entrypoint for
external callers.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from sigsync.adapters import JavaAdapter, LanguageAdapter
from sigsync.core.config import SigsyncConfig, get_config
from sigsync.fix.codefix import SignatureCodeFixProvider
from sigsync.fix.synchronizer import SignatureSynchronizer
from sigsync.services.check_service import CheckResult, CheckService
from sigsync.services.fix_service import FixResult, FixService

if TYPE_CHECKING:
    from sigsync.core.cancellation import CancellationToken


class SigsyncClient:
    """High-level client that owns configuration and an adapter and exposes services."""

    def __init__(
        self,
        config: SigsyncConfig | None = None,
        *,
        adapter: LanguageAdapter | None = None,
    ) -> None:
        """Create a sigsync client.

        Args:
            config: Optional configuration (defaults to the global configuration).
            adapter: Optional language adapter (defaults to a Java adapter).
        """
        self._config = config or get_config()
        self._adapter = adapter or JavaAdapter(self._config)

        self._checker: CheckService | None = None
        self._fixer: FixService | None = None
        self._code_fixes: SignatureCodeFixProvider | None = None

    @property
    def config(self) -> SigsyncConfig:
        return self._config

    @property
    def adapter(self) -> LanguageAdapter:
        """Language adapter shared by all services."""
        return self._adapter

    @property
    def checker(self) -> CheckService:
        """Signature drift detection service."""
        if self._checker is None:
            self._checker = CheckService(self._config, self._adapter)
        return self._checker

    @property
    def fixer(self) -> FixService:
        """Signature repair service."""
        if self._fixer is None:
            self._fixer = FixService(self._config, self._adapter)
        return self._fixer

    @property
    def code_fixes(self) -> SignatureCodeFixProvider:
        """Code fix provider for individual diagnostics."""
        if self._code_fixes is None:
            self._code_fixes = SignatureCodeFixProvider(
                SignatureSynchronizer(self._adapter, self._config)
            )
        return self._code_fixes

    def check(self, path: str | Path) -> CheckResult:
        """Check a project root for signature drift."""
        return self.checker.check(Path(path))

    def fix(
        self,
        path: str | Path,
        *,
        dry_run: bool = False,
        method: str | None = None,
        cancellation: CancellationToken | None = None,
    ) -> FixResult:
        """Repair interface members under a project root."""
        return self.fixer.fix(Path(path), dry_run=dry_run, method=method, cancellation=cancellation)
