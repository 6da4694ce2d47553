"""Java language adapter submodule.

This module provides the Java adapter for parsing Java source code
into the symbol table the analysis works on.
"""

from sigsync.adapters.java.adapter import JavaAdapter
from sigsync.adapters.java.resolver import JavaResolver
from sigsync.adapters.java.scanner import JavaScanner
from sigsync.adapters.java.type_refs import JavaTypeRefBuilder

__all__ = ["JavaAdapter", "JavaResolver", "JavaScanner", "JavaTypeRefBuilder"]
