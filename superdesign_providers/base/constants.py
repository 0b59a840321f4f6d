"""Base shared constants for provider adapters.

Central location to avoid scattering magic strings and default numbers
across the backend adapters.

Security
--------
Only sentinel strings and numeric defaults live here; no credentials.

# pragma: allowlist secret
"""
from __future__ import annotations

# Transport kinds reported by ``get_provider_type``
PROVIDER_TYPE_API = "api"
PROVIDER_TYPE_BINARY = "binary"

# Role value shared by every field of the canonical assistant message
ASSISTANT_ROLE = "assistant"

# Joiner used when a backend fragments assistant text across parts
TEXT_PART_SEPARATOR = "\n"

# Purpose key for the pooled HTTP client used by single-shot queries
HTTP_PURPOSE_QUERY = "query"

# Cancellation message template; formatted with the backend short name
CANCELLED_MESSAGE_TEMPLATE = "{backend} request was cancelled"

# Directive appended when a credential disappears between init and query
CONFIGURE_COMMAND_TEMPLATE = 'Please run "Configure {backend} API Key" command.'

__all__ = [
    "PROVIDER_TYPE_API",
    "PROVIDER_TYPE_BINARY",
    "ASSISTANT_ROLE",
    "TEXT_PART_SEPARATOR",
    "HTTP_PURPOSE_QUERY",
    "CANCELLED_MESSAGE_TEMPLATE",
    "CONFIGURE_COMMAND_TEMPLATE",
]
