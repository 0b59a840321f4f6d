"""Mistral API provider.

Calls the OpenAI-style chat-completions endpoint with a bearer token.
Shared lifecycle and error policy come from :class:`ApiProvider`.
"""

from __future__ import annotations

from typing import List, Tuple

from ..base.api_provider import ApiProvider
from ..base.models import QueryOptions, Turn
from ..base.request import HttpRequestSpec
from ..config.defaults import (
    MISTRAL_API_KEY_SETTING,
    MISTRAL_DEFAULT_BASE_URL,
    MISTRAL_DEFAULT_MODEL,
    MISTRAL_MODEL_SETTING,
)
from .parsing import MistralResponseNormalizer
from .payload import build_chat_request

MISTRAL_AUTH_KEYWORDS: Tuple[str, ...] = (
    "api key",
    "unauthorized",
    "forbidden",
    "invalid token",
    "invalid_api_key",
)


class MistralApiProvider(ApiProvider):
    """Mistral chat-completions backend."""

    provider_key = "mistral"
    display_name = "Mistral API"
    backend_label = "Mistral"
    api_key_setting = MISTRAL_API_KEY_SETTING
    model_setting = MISTRAL_MODEL_SETTING
    default_model = MISTRAL_DEFAULT_MODEL
    default_base_url = MISTRAL_DEFAULT_BASE_URL
    auth_keywords = MISTRAL_AUTH_KEYWORDS
    normalizer_class = MistralResponseNormalizer

    def build_request(
        self,
        turns: List[Turn],
        *,
        model: str,
        api_key: str,
        options: QueryOptions,
    ) -> HttpRequestSpec:
        return build_chat_request(self.base_url, model, api_key, turns)


__all__ = ["MistralApiProvider", "MISTRAL_AUTH_KEYWORDS"]
