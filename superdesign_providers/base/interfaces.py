"""
Provider-agnostic interface (Protocol) for the providers layer.

``LLMProvider`` is the contract every backend implementation satisfies and
the only type host code should depend on.
"""

from __future__ import annotations

from typing import Any, List, Literal, Mapping, Optional, Protocol, Union, runtime_checkable

from .cancellation import CancellationToken
from .host import StreamCallback
from .models import CanonicalMessage, QueryOptions

ProviderType = Literal["api", "binary"]


@runtime_checkable
class LLMProvider(Protocol):
    """Interface for interchangeable LLM backends.

    Implementations hide backend authentication, request shaping and
    response parsing, and return the canonical message shape.
    """

    async def initialize(self) -> None:
        """Run (or join) the one-time startup sequence.

        Idempotent. Raises ``ConfigurationError`` when the credential is
        missing; a failed attempt leaves the provider uninitialized so the
        next call retries from scratch.
        """
        ...

    async def query(
        self,
        prompt: Optional[str],
        options: Union[QueryOptions, Mapping[str, Any], None] = None,
        cancel_token: Optional[CancellationToken] = None,
        on_message: Optional[StreamCallback] = None,
    ) -> List[CanonicalMessage]:
        """Send one prompt and return exactly one canonical message."""
        ...

    def is_ready(self) -> bool:
        """Current readiness; never triggers initialization."""
        ...

    async def wait_for_initialization(self) -> bool:
        """Await readiness, reporting failure as ``False`` instead of raising."""
        ...

    def has_valid_configuration(self) -> bool:
        """Whether a non-blank credential is currently configured."""
        ...

    async def refresh_configuration(self) -> bool:
        """Reload the credential; ``False`` when it is absent."""
        ...

    def is_auth_error(self, message: str) -> bool:
        """Whether an error message looks credential-related."""
        ...

    def get_provider_name(self) -> str:
        ...

    def get_provider_type(self) -> ProviderType:
        ...


__all__ = ["LLMProvider", "ProviderType"]
