"""Response normalizer contract.

Each backend ships one normalizer class turning its decoded JSON success
body into a :class:`CanonicalMessage`. The provider picks its normalizer by
class attribute at construction time; there is no runtime inspection of
response shapes across backends.

Rules shared by every implementation:

1. An out-of-band block signal raises ``ContentBlockedError`` before any
   text extraction.
2. Text fragments are joined with a newline and the result is trimmed.
3. Missing text yields an empty message, never an error.
"""
from __future__ import annotations

from typing import Any, Iterable, Protocol, runtime_checkable

from .constants import TEXT_PART_SEPARATOR
from .models import CanonicalMessage


@runtime_checkable
class ResponseNormalizer(Protocol):
    """Parse a decoded success body into the canonical message."""

    def parse(self, raw_body: Any) -> CanonicalMessage:
        ...


def join_text_fragments(fragments: Iterable[Any]) -> str:
    """Join non-blank string fragments with newlines and trim the result."""
    kept = [f for f in fragments if isinstance(f, str) and f.strip()]
    return TEXT_PART_SEPARATOR.join(kept).strip()


def first_item(value: Any) -> Any:
    """Return ``value[0]`` for a non-empty list, otherwise ``None``."""
    if isinstance(value, list) and value:
        return value[0]
    return None


def get_mapping(value: Any, key: str) -> Any:
    """Return ``value[key]`` when ``value`` is a dict, otherwise ``None``."""
    return value.get(key) if isinstance(value, dict) else None


__all__ = ["ResponseNormalizer", "join_text_fragments", "first_item", "get_mapping"]
