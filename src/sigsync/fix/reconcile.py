"""Parameter-list reconciliation policy."""

from __future__ import annotations

from collections.abc import Sequence

from sigsync.core.models import ParameterSymbol


def reconcile_parameters(
    old: Sequence[ParameterSymbol], new: Sequence[ParameterSymbol]
) -> tuple[ParameterSymbol, ...]:
    """Compute the interface member's new parameter list.

    Full replacement: the result is exactly the implementation's parameter
    list, in its order. Nothing of ``old`` survives, so the interface ends up
    matching the implementation and a re-check reports nothing.

    Args:
        old: The interface member's current parameters
        new: The implementing method's parameters

    Returns:
        The parameters the interface member should declare
    """
    return tuple(new)
