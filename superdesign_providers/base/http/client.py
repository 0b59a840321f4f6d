"""Shared async HTTP client pool for providers.

Purpose:
    Keep one reusable ``httpx.AsyncClient`` per ``(base_url, purpose)`` and
    event loop so adapters do not open a new connection pool for every
    query. Timeouts derive from :func:`get_timeout_config`.

Lifecycle & cleanup:
    - Clients are bound to the event loop that was running when they were
      first requested. Pools are keyed by the loop object itself (weakly),
      so a new loop never inherits a client from a finished one.
    - Pools belonging to closed loops are evicted on the next lookup.
    - :func:`aclose_all_clients` closes the running loop's clients and
      forgets every other pool. Hosts should await it on shutdown; tests
      call it in teardown.

Design notes:
    - Adapters may bypass the pool entirely by receiving an explicit client
      (tests pass one built on ``httpx.MockTransport``).
"""

from __future__ import annotations

import asyncio
import weakref
from typing import Dict, Optional, Tuple

import httpx

from ..timeouts import get_timeout_config

_ClientKey = Tuple[Optional[str], str]

_POOLS: "weakref.WeakKeyDictionary[asyncio.AbstractEventLoop, Dict[_ClientKey, httpx.AsyncClient]]" = (
    weakref.WeakKeyDictionary()
)


def _evict_closed_loops() -> None:
    for loop in [lp for lp in list(_POOLS.keys()) if lp.is_closed()]:
        _POOLS.pop(loop, None)


def get_async_client(base_url: Optional[str], purpose: str) -> httpx.AsyncClient:
    """Return a pooled ``httpx.AsyncClient`` for the given base URL and purpose.

    Must be called from within a running event loop.

    Parameters:
        base_url: Optional API base URL set on the client so callers may use
            relative paths. ``None`` groups clients under a shared key.
        purpose: Short string discriminating separate pools (e.g. "query").

    Returns:
        A reusable ``httpx.AsyncClient`` bound to the running loop.
    """
    loop = asyncio.get_running_loop()
    _evict_closed_loops()
    pool = _POOLS.setdefault(loop, {})
    key = (base_url, purpose)
    client = pool.get(key)
    if client is not None and not client.is_closed:
        return client
    timeout = get_timeout_config().as_httpx()
    client = httpx.AsyncClient(base_url=base_url, timeout=timeout) if base_url else httpx.AsyncClient(timeout=timeout)
    pool[key] = client
    return client


async def aclose_all_clients() -> None:
    """Close the running loop's pooled clients and clear the pool.

    Clients owned by other loops cannot be awaited from here; they are
    dropped from the pool without being closed.
    """
    loop = asyncio.get_running_loop()
    clients = list(_POOLS.pop(loop, {}).values())
    _POOLS.clear()
    for c in clients:
        await c.aclose()


__all__ = ["get_async_client", "aclose_all_clients"]
