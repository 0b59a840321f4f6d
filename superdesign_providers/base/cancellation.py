"""Cooperative cancellation primitives (public API facade).

Notes
-----
- ``CancellationToken`` is created by the caller, one per query, and never
  reused.
- ``CancelledError`` is raised by a query whose token was signalled, even
  when the transport reported some other failure for the aborted call.
"""

from .cancellation_parts.cancelled_error import CancelledError
from .cancellation_parts.cancellation_token import CancellationToken

__all__ = ["CancellationToken", "CancelledError"]
