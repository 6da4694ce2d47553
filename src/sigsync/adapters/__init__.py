"""Language adapters for parsing source code.

This module provides the base classes and utilities for implementing
language-specific front ends that produce symbol tables and rewrite
method declarations.
"""

from sigsync.adapters.base import (
    FileContext,
    LanguageAdapter,
    SymbolTable,
    generate_document_id,
)
from sigsync.adapters.java import JavaAdapter

__all__ = [
    "FileContext",
    "JavaAdapter",
    "LanguageAdapter",
    "SymbolTable",
    "generate_document_id",
]
