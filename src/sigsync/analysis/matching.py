"""Pair implementing methods with the interface members they implement."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sigsync.adapters.base import SymbolTable
from sigsync.analysis.signature import parameter_types_match
from sigsync.core.config import MemberMatching
from sigsync.core.models import (
    FieldSymbol,
    MethodSymbol,
    NestedTypeSymbol,
    TypeSymbol,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImplementationPair:
    """An implementing method and the interface member of the same name."""

    implementation: MethodSymbol
    implementing_type: TypeSymbol
    interface: TypeSymbol
    member: MethodSymbol | FieldSymbol | NestedTypeSymbol

    @property
    def member_is_method(self) -> bool:
        return isinstance(self.member, MethodSymbol)


def find_interface_member(
    method: MethodSymbol,
    symbol_table: SymbolTable,
    matching: MemberMatching = MemberMatching.MAPPING,
) -> ImplementationPair | None:
    """Find the interface member a method implements.

    Only interfaces the containing type lists directly are searched; their
    members are flattened in declaration order.

    With ``MemberMatching.MAPPING`` an interface method with the same name
    and the same parameter types (the member the method actually overrides)
    wins. Otherwise, and as the fallback, the first member with the same
    name is used. With overloads that is a coarse pick, so it is logged.

    Args:
        method: The implementing method
        symbol_table: Symbol table of the project
        matching: Member lookup policy

    Returns:
        The pair, or None when no interface member has the method's name
    """
    containing_type = symbol_table.get_type(method.containing_type)
    if containing_type is None or not containing_type.interfaces:
        return None

    candidates = [
        (interface, member)
        for interface in symbol_table.interfaces_of(containing_type)
        for member in interface.members
        if member.name == method.name
    ]
    if not candidates:
        return None

    if matching == MemberMatching.MAPPING:
        for interface, member in candidates:
            if isinstance(member, MethodSymbol) and parameter_types_match(member, method):
                return ImplementationPair(method, containing_type, interface, member)

    if len(candidates) > 1:
        logger.debug(
            f"{method.qualified_name}: {len(candidates)} interface members named "
            f"'{method.name}', using the first declared in {candidates[0][0].qualified_name}"
        )
    interface, member = candidates[0]
    return ImplementationPair(method, containing_type, interface, member)
