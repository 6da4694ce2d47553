"""Cooperative cancellation for repair operations."""

from __future__ import annotations

import threading


class OperationCancelledError(Exception):
    """Raised when a caller cancels an in-flight operation."""


class CancellationToken:
    """Cancellation flag shared between a caller and a running operation.

    The operation polls ``raise_if_cancelled`` at its suspension points
    (tree retrieval); the caller calls ``cancel`` from any thread.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise OperationCancelledError("Operation was cancelled")
