"""
Error classification helpers.

``classify_exception`` maps arbitrary exceptions to a normalized
:class:`ErrorCode` for structured logging. ``is_auth_message`` implements
the substring policy each backend uses to decide whether a failure is
credential-related and should skip the user-facing popup.
"""
from __future__ import annotations

import asyncio
from typing import Dict, Iterable, Optional, Tuple

from .error_code import ErrorCode
from .provider_error import ProviderError


def _valid_status(value: object) -> Optional[int]:
    if isinstance(value, int) and not isinstance(value, bool) and 100 <= value <= 599:
        return value
    return None


def _extract_status(exc: BaseException) -> Optional[int]:
    """Best-effort HTTP status for ``exc``.

    Looks at ``status_code`` (``TransportError``, ``AuthError``), then
    ``status``, then ``response.status_code`` (``httpx.HTTPStatusError``).
    """
    candidates = (
        getattr(exc, "status_code", None),
        getattr(exc, "status", None),
        getattr(getattr(exc, "response", None), "status_code", None),
    )
    for candidate in candidates:
        status = _valid_status(candidate)
        if status is not None:
            return status
    return None


_HTTP_STATUS_MAP: Dict[int, ErrorCode] = {
    400: ErrorCode.VALIDATION,
    401: ErrorCode.AUTH,
    403: ErrorCode.AUTH,
    404: ErrorCode.NOT_FOUND,
    408: ErrorCode.TIMEOUT,
    422: ErrorCode.VALIDATION,
    429: ErrorCode.RATE_LIMIT,
    500: ErrorCode.SERVER_ERROR,
    502: ErrorCode.TRANSIENT,
    503: ErrorCode.UNAVAILABLE,
    504: ErrorCode.TIMEOUT,
}

# checked in order; first hit wins
_MESSAGE_HINTS: Tuple[Tuple[ErrorCode, Tuple[str, ...]], ...] = (
    (ErrorCode.TIMEOUT, ("timeout", "timed out")),
    (ErrorCode.AUTH, ("api key", "unauthorized", "forbidden")),
    (ErrorCode.NOT_FOUND, ("not found",)),
    (ErrorCode.UNAVAILABLE, ("unavailable",)),
    (ErrorCode.VALIDATION, ("invalid", "malformed")),
)


def _heuristic_from_message(msg: str) -> Optional[ErrorCode]:
    """Substring heuristic for exceptions carrying no status."""
    if "rate" in msg and "limit" in msg:
        return ErrorCode.RATE_LIMIT
    return next((code for code, hints in _MESSAGE_HINTS if any(h in msg for h in hints)), None)


def classify_exception(exc: BaseException) -> ErrorCode:
    """Map ``exc`` to an :class:`ErrorCode`.

    A ``ProviderError`` keeps its own code, except that a generic
    ``TRANSPORT`` failure with a known HTTP status is refined by that status.
    Other exceptions go through timeout detection, the status table, then
    message hints, and finally ``UNKNOWN``.
    """
    status = _extract_status(exc)
    by_status = _HTTP_STATUS_MAP.get(status) if status is not None else None
    if isinstance(exc, ProviderError):
        if exc.code is ErrorCode.TRANSPORT and by_status is not None:
            return by_status
        return exc.code
    if isinstance(exc, (TimeoutError, asyncio.TimeoutError)):
        return ErrorCode.TIMEOUT
    if by_status is not None:
        return by_status
    return _heuristic_from_message(str(exc).lower()) or ErrorCode.UNKNOWN


def is_auth_message(message: str, keywords: Iterable[str]) -> bool:
    """Return True when ``message`` contains any keyword, ignoring case."""
    normalized = (message or "").lower()
    return any(k.lower() in normalized for k in keywords)


__all__ = ["classify_exception", "is_auth_message"]
