"""Gemini response normalization."""
from __future__ import annotations

from typing import Any, List

from ..base.errors import ContentBlockedError
from ..base.models import CanonicalMessage
from ..base.normalizer import first_item, get_mapping, join_text_fragments

PROVIDER_KEY = "gemini"


def extract_block_reason(raw_body: Any) -> Any:
    """Return ``promptFeedback.blockReason`` when the prompt was blocked."""
    return get_mapping(get_mapping(raw_body, "promptFeedback"), "blockReason")


def extract_text_parts(raw_body: Any) -> List[Any]:
    """Return the ``text`` values of the first candidate's parts.

    Missing or malformed structure yields an empty list.
    """
    candidate = first_item(get_mapping(raw_body, "candidates"))
    parts = get_mapping(get_mapping(candidate, "content"), "parts")
    if not isinstance(parts, list):
        return []
    return [get_mapping(part, "text") for part in parts]


class GeminiResponseNormalizer:
    """Turn a ``generateContent`` success body into a :class:`CanonicalMessage`.

    A block reason wins over any candidate text and raises
    :class:`ContentBlockedError`.
    """

    def parse(self, raw_body: Any) -> CanonicalMessage:
        reason = extract_block_reason(raw_body)
        if reason:
            raise ContentBlockedError(
                f"Gemini blocked the prompt: {reason}",
                PROVIDER_KEY,
                reason=str(reason),
            )
        return CanonicalMessage.from_text(join_text_fragments(extract_text_parts(raw_body)))


__all__ = ["GeminiResponseNormalizer", "extract_block_reason", "extract_text_parts"]
