"""Cancellation error type.

Defines the public ``CancelledError`` raised when a query observes that its
cancellation token was signalled. Distinct from ``asyncio.CancelledError``:
this one is an ordinary ``Exception`` carrying a human-readable message.
"""

from __future__ import annotations


class CancelledError(RuntimeError):
    """Raised when a query is cancelled by the caller.

    Separating user cancellation from transport failures lets callers skip
    error popups and avoid treating an aborted socket read as a backend error.
    """

__all__ = ["CancelledError"]
