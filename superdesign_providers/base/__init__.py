"""
Providers base package.

Exports the provider-agnostic contracts, DTOs, error taxonomy and the
provider factory used by the backend adapters and by host code:

- Interfaces: ``LLMProvider`` and the host collaborator Protocols
- Models (DTOs): ``QueryOptions``, ``Turn``, ``CanonicalMessage``
- Lifecycle: ``InitState`` and the shared ``ApiProvider`` implementation
- Factory: lazy creation of provider adapters by canonical name
"""

from .api_provider import ApiProvider
from .cancellation import CancellationToken, CancelledError
from .credentials import SessionCredentials
from .dto import AdapterParams
from .errors import (
    AuthError,
    ConfigurationError,
    ContentBlockedError,
    ErrorCode,
    ProviderError,
    TransportError,
)
from .factory import ProviderFactory, UnknownProviderError
from .host import CredentialStore, LocalWorkspace, LogNotifier, Notifier, StreamCallback, WorkspaceResolver
from .interfaces import LLMProvider, ProviderType
from .lifecycle import InitState
from .models import CanonicalMessage, QueryOptions, Role, Turn
from .timeouts import TimeoutConfig, get_timeout_config

__all__ = [
    # Interfaces
    "LLMProvider",
    "ProviderType",
    "CredentialStore",
    "WorkspaceResolver",
    "Notifier",
    "StreamCallback",
    # Models
    "Role",
    "Turn",
    "QueryOptions",
    "CanonicalMessage",
    "AdapterParams",
    # Lifecycle / implementation
    "InitState",
    "ApiProvider",
    "SessionCredentials",
    "LocalWorkspace",
    "LogNotifier",
    # Errors
    "ErrorCode",
    "ProviderError",
    "ConfigurationError",
    "TransportError",
    "ContentBlockedError",
    "AuthError",
    "CancelledError",
    "CancellationToken",
    # Factory
    "ProviderFactory",
    "UnknownProviderError",
    # Timeouts
    "TimeoutConfig",
    "get_timeout_config",
]
