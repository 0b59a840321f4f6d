"""
Normalized provider error codes (taxonomy).

Defines the `ErrorCode` enumeration used by the backend adapters and the
query failure classifier. Values are lowercase snake_case and are a stable
contract for structured log events.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories."""

    CONFIGURATION = "configuration"
    AUTH = "auth"
    TRANSPORT = "transport"
    CONTENT_BLOCKED = "content_blocked"
    CANCELLED = "cancelled"
    RATE_LIMIT = "rate_limit"
    TIMEOUT = "timeout"
    TRANSIENT = "transient"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    SERVER_ERROR = "server_error"
    UNAVAILABLE = "unavailable"
    UNKNOWN = "unknown"


__all__ = ["ErrorCode"]
