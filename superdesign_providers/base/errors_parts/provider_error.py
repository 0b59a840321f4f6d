"""
Structured provider error exception types.

``ProviderError`` wraps backend failures with a normalized ``ErrorCode`` so
the query classifier and structured logging can treat every backend alike.
The subclasses name the failure kinds callers are expected to branch on.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass(eq=False)
class ProviderError(Exception):
    """Represents a structured provider error with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message; also the ``str()`` value so
            message-based classification and user notifications see exactly
            what the backend reported.
        provider: Provider key where the error originated (e.g., ``"gemini"``).
        model: Optional model name associated with the failure.
        raw: Optional original exception for diagnostics.
    """

    code: ErrorCode
    message: str
    provider: str
    model: Optional[str] = None
    raw: Optional[BaseException] = None

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message

    def summary(self) -> str:
        """Return a compact string combining provider, model, code, and message."""
        return f"{self.provider}:{self.model or '-'} {self.code.value}: {self.message}"


class ConfigurationError(ProviderError):
    """Required credential is missing or blank; never retried automatically."""

    def __init__(self, message: str, provider: str, model: Optional[str] = None) -> None:
        super().__init__(ErrorCode.CONFIGURATION, message, provider, model)


class TransportError(ProviderError):
    """Non-2xx HTTP response or network failure.

    ``status_code`` is ``None`` for network-level failures; ``body`` carries
    the raw response text verbatim when the backend answered.
    """

    def __init__(
        self,
        message: str,
        provider: str,
        model: Optional[str] = None,
        *,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
        raw: Optional[BaseException] = None,
    ) -> None:
        super().__init__(ErrorCode.TRANSPORT, message, provider, model, raw)
        self.status_code = status_code
        self.body = body


class ContentBlockedError(ProviderError):
    """Backend refused to generate; ``reason`` is the backend-reported string."""

    def __init__(self, message: str, provider: str, reason: str, model: Optional[str] = None) -> None:
        super().__init__(ErrorCode.CONTENT_BLOCKED, message, provider, model)
        self.reason = reason


class AuthError(ProviderError):
    """Credential-related failure identified by keyword classification.

    Raised in place of the original error (kept on ``raw``) so callers can
    drive a re-authentication flow instead of showing a popup.
    """

    def __init__(
        self,
        message: str,
        provider: str,
        model: Optional[str] = None,
        *,
        status_code: Optional[int] = None,
        raw: Optional[BaseException] = None,
    ) -> None:
        super().__init__(ErrorCode.AUTH, message, provider, model, raw)
        self.status_code = status_code


__all__ = [
    "ProviderError",
    "ConfigurationError",
    "TransportError",
    "ContentBlockedError",
    "AuthError",
]
