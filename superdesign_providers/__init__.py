"""superdesign_providers package

Interchangeable LLM HTTP backends behind one provider interface.

Purpose:
    Send one prompt to Gemini or Mistral and get back a normalized
    assistant message, with lazy idempotent initialization, cooperative
    cancellation and a uniform error policy. Host code depends on
    :class:`LLMProvider` and creates instances with :func:`create`.

Public API (re-exported):
    - Version: ``__version__``
    - Factory: :func:`create`, :class:`ProviderFactory`, :class:`AdapterParams`
    - Contracts: :class:`LLMProvider`, :class:`QueryOptions`,
      :class:`CanonicalMessage`, :class:`CancellationToken`
    - Errors: :class:`ProviderError` and subclasses, :class:`CancelledError`,
      :class:`ErrorCode`
    - Host defaults: :class:`SettingsStore`, :class:`SessionCredentials`,
      :class:`LocalWorkspace`, :class:`LogNotifier`
"""

from typing import Any, Mapping, Optional, Union

from .base.cancellation import CancellationToken, CancelledError
from .base.credentials import SessionCredentials
from .base.dto import AdapterParams
from .base.errors import (
    AuthError,
    ConfigurationError,
    ContentBlockedError,
    ErrorCode,
    ProviderError,
    TransportError,
)
from .base.factory import ProviderFactory, UnknownProviderError
from .base.host import LocalWorkspace, LogNotifier
from .base.interfaces import LLMProvider
from .base.models import CanonicalMessage, QueryOptions
from .config import SettingsStore

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "create",
    "ProviderFactory",
    "UnknownProviderError",
    "AdapterParams",
    "LLMProvider",
    "QueryOptions",
    "CanonicalMessage",
    "CancellationToken",
    "CancelledError",
    "ErrorCode",
    "ProviderError",
    "ConfigurationError",
    "TransportError",
    "ContentBlockedError",
    "AuthError",
    "SettingsStore",
    "SessionCredentials",
    "LocalWorkspace",
    "LogNotifier",
]


def create(
    provider_name: str,
    *,
    params: Union[AdapterParams, Mapping[str, Any], None] = None,
    **kwargs: Any,
) -> LLMProvider:
    """Instantiate a provider adapter through :class:`ProviderFactory`.

    Parameters
    ----------
    provider_name:
        Canonical provider name (``"gemini"`` or ``"mistral"``).
    params:
        Optional :class:`AdapterParams` (or an equivalent mapping).
    **kwargs:
        Host collaborators and constructor overrides; these win over
        ``params``.

    Raises
    ------
    ProviderError
        Wrapping the factory's :class:`UnknownProviderError` (code
        ``configuration``) or any other construction failure.
    """
    try:
        return ProviderFactory.create(provider_name, params=params, **kwargs)
    except Exception as e:
        raise ProviderError(
            code=ErrorCode.CONFIGURATION,
            message=f"Failed to create provider '{provider_name}': {e}",
            provider=provider_name,
        ) from e
