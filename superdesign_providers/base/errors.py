"""Unified provider error taxonomy public surface.

Re-exports the implementations under ``superdesign_providers.base.errors_parts``
to keep a stable import path. ``CancelledError`` lives with the cancellation
primitives and is re-exported here for callers that handle every query
failure in one place.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.provider_error import (
    AuthError,
    ConfigurationError,
    ContentBlockedError,
    ProviderError,
    TransportError,
)
from .errors_parts.classification import classify_exception, is_auth_message
from .cancellation_parts.cancelled_error import CancelledError

__all__ = [
    "ErrorCode",
    "ProviderError",
    "ConfigurationError",
    "TransportError",
    "ContentBlockedError",
    "AuthError",
    "CancelledError",
    "classify_exception",
    "is_auth_message",
]
