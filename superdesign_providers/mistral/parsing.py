"""Mistral response normalization.

``choices[0].message.content`` is either a string or, on newer API
versions, a list of typed chunks; text chunks are joined with newlines.
Anything else normalizes to an empty message.
"""
from __future__ import annotations

from typing import Any

from ..base.models import CanonicalMessage
from ..base.normalizer import first_item, get_mapping, join_text_fragments


def extract_content(raw_body: Any) -> str:
    choice = first_item(get_mapping(raw_body, "choices"))
    content = get_mapping(get_mapping(choice, "message"), "content")
    if isinstance(content, str):
        return content.strip()
    if isinstance(content, list):
        return join_text_fragments(
            get_mapping(chunk, "text") for chunk in content if get_mapping(chunk, "type") in (None, "text")
        )
    return ""


class MistralResponseNormalizer:
    """Turn a chat-completions success body into a :class:`CanonicalMessage`."""

    def parse(self, raw_body: Any) -> CanonicalMessage:
        return CanonicalMessage.from_text(extract_content(raw_body))


__all__ = ["MistralResponseNormalizer", "extract_content"]
