"""Cooperative cancellation token implementation.

Exposes the ``CancellationToken`` threaded through each query. Callers
signal it with ``cancel``; the transport awaits ``wait`` alongside the HTTP
call to abort it, and the failure classifier reads ``cancelled`` after the
fact.
"""

from __future__ import annotations

import asyncio
import contextlib
from threading import Lock
from typing import List, Tuple

from .state import State
from .cancelled_error import CancelledError


def _wake(fut: "asyncio.Future[None]") -> None:
    if not fut.done():
        fut.set_result(None)


class CancellationToken:
    """A cooperative cancellation token with optional cascading semantics.

    ``cancel`` may be called from any thread; pending ``wait`` calls are woken
    on their own event loop. Child tokens inherit cancellation when the
    parent is cancelled.
    """

    def __init__(self, *, parent: "CancellationToken | None" = None) -> None:
        self._state = State()
        self._lock = Lock()
        self._children: List[CancellationToken] = []
        self._waiters: List[Tuple[asyncio.AbstractEventLoop, asyncio.Future]] = []
        if parent is not None:
            parent.link_child(self)

    @property
    def cancelled(self) -> bool:  # noqa: D401 - short form
        """Whether cancellation has been requested."""
        return self._state.cancelled

    @property
    def reason(self) -> str | None:  # noqa: D401 - short form
        """Reason string supplied at cancel time (if any)."""
        return self._state.reason

    def cancel(self, reason: str | None = None) -> None:
        """Request cancellation, wake waiters, and cascade to children."""
        with self._lock:
            if self._state.cancelled:
                return
            self._state.cancelled = True
            self._state.reason = reason
            children = list(self._children)
            waiters = list(self._waiters)
            self._waiters.clear()
        for loop, fut in waiters:
            # loop may already be closed if the awaiting query was torn down
            with contextlib.suppress(RuntimeError):
                loop.call_soon_threadsafe(_wake, fut)
        for child in children:
            child.cancel(reason)

    def link_child(self, token: "CancellationToken") -> "CancellationToken":
        """Link a child token so parent cancellation cascades (returns child)."""
        with self._lock:
            self._children.append(token)
            should_cancel = self._state.cancelled
            reason = self._state.reason
        if should_cancel:
            token.cancel(reason)
        return token

    def child(self) -> "CancellationToken":
        """Create and link a child token (shortcut)."""
        return CancellationToken(parent=self)

    def raise_if_cancelled(self) -> None:
        """Raise ``CancelledError`` if token is cancelled."""
        if self._state.cancelled:
            raise CancelledError(self._state.reason or "operation cancelled")

    async def wait(self) -> None:
        """Suspend until cancellation is requested (returns at once if it was)."""
        loop = asyncio.get_running_loop()
        fut: asyncio.Future = loop.create_future()
        entry = (loop, fut)
        with self._lock:
            if self._state.cancelled:
                return
            self._waiters.append(entry)
        try:
            await fut
        finally:
            with self._lock:
                if entry in self._waiters:
                    self._waiters.remove(entry)

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return (
            f"CancellationToken(cancelled={self._state.cancelled}, "
            f"reason={self._state.reason!r}, children={len(self._children)})"
        )


__all__ = ["CancellationToken"]
