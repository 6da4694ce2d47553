"""Mismatch detector.

Walks the method symbols of a project and reports every implementing
method whose signature has drifted from the interface member it implements.
"""

from __future__ import annotations

import concurrent.futures
import logging

from sigsync.adapters.base import SymbolTable
from sigsync.analysis.matching import find_interface_member
from sigsync.analysis.rules import SIGNATURE_MISMATCH
from sigsync.analysis.signature import MethodSignature, signatures_mismatch
from sigsync.core.config import SigsyncConfig, get_config
from sigsync.core.models import Diagnostic, MethodSymbol

logger = logging.getLogger(__name__)


class MismatchDetector:
    """Stateless per-method signature drift detection.

    ``analyze_method`` reads the symbol table and nothing else, so calls for
    different methods may run concurrently in any order.
    """

    def __init__(self, config: SigsyncConfig | None = None) -> None:
        self._config = config or get_config()

    def analyze_method(self, method: MethodSymbol, symbol_table: SymbolTable) -> Diagnostic | None:
        """Decide whether a method signals a diagnostic.

        Args:
            method: The method symbol to check
            symbol_table: Symbol table of the project

        Returns:
            A diagnostic anchored at the method's name, or None
        """
        pair = find_interface_member(method, symbol_table, self._config.member_matching)
        if pair is None:
            return None
        if not pair.member_is_method:
            logger.debug(
                f"{method.qualified_name}: matching member in "
                f"{pair.interface.qualified_name} is not a method"
            )
            return None
        if not signatures_mismatch(method, pair.member):
            return None
        if not method.locations:
            return None

        return SIGNATURE_MISMATCH.create(
            method.locations[0],
            method.name,
            containing_type=pair.implementing_type.qualified_name,
            interface_type=pair.interface.qualified_name,
            implementation_signature=MethodSignature.from_symbol(method).render(method.name),
            interface_signature=MethodSignature.from_symbol(pair.member).render(pair.member.name),
        )

    def detect_all(
        self, symbol_table: SymbolTable, max_workers: int | None = None
    ) -> list[Diagnostic]:
        """Analyze every method of a project in parallel.

        Args:
            symbol_table: Symbol table of the project
            max_workers: Worker threads (defaults to configuration)

        Returns:
            Diagnostics ordered by path and position
        """
        methods = list(symbol_table.iter_methods())
        workers = max_workers or self._config.max_workers

        with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as executor:
            results = executor.map(
                lambda method: self.analyze_method(method, symbol_table), methods
            )
            diagnostics = [d for d in results if d is not None]

        diagnostics.sort(key=lambda d: (d.location.path, d.location.start_byte))
        logger.debug(f"Checked {len(methods)} methods, {len(diagnostics)} mismatches")
        return diagnostics
