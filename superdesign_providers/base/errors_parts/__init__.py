"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `superdesign_providers.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .provider_error import (
    AuthError,
    ConfigurationError,
    ContentBlockedError,
    ProviderError,
    TransportError,
)
from .classification import classify_exception, is_auth_message

__all__ = [
    "ErrorCode",
    "ProviderError",
    "ConfigurationError",
    "TransportError",
    "ContentBlockedError",
    "AuthError",
    "classify_exception",
    "is_auth_message",
]
