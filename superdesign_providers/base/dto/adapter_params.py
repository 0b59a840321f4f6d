"""Typed parameter object for provider adapter construction.

Purpose
-------
Carry the scalar settings shared by every backend adapter through the
factory in one validated object instead of long keyword lists. Host
collaborators (settings store, workspace resolver, notifier, credential
holder, HTTP client, logger) are passed to the factory as plain keyword
arguments and are not part of this DTO.

External dependencies
---------------------
- Pydantic v2 ``BaseModel`` for validation and ``.model_dump()``.
"""
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, Field, field_validator

from ...config.defaults import SETTINGS_SCOPE


class AdapterParams(BaseModel):
    """Common provider adapter construction parameters.

    Attributes
    ----------
    provider:
        Canonical provider key (``"gemini"`` or ``"mistral"``). Optional;
        dropped before the adapter constructor is called.
    scope:
        Settings scope key passed to ``CredentialStore.get``.
    base_url:
        Override for the backend host (proxies, local gateways, tests). The
        request path and envelope stay fixed per backend.
    timeout_seconds:
        Per-request timeout for a client the adapter creates itself. Pooled
        clients use the central timeout configuration.
    headers:
        Extra static HTTP headers merged under the backend's own headers.
    extra:
        Free-form adapter-specific values.
    """

    provider: Optional[str] = None
    scope: str = SETTINGS_SCOPE
    base_url: Optional[str] = None
    timeout_seconds: Optional[float] = Field(default=None, gt=0)
    headers: Mapping[str, str] = Field(default_factory=dict)
    extra: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip().rstrip("/")
        return value or None


__all__ = ["AdapterParams"]
