"""Gemini API provider.

Talks to the Google Generative Language REST endpoint directly with
``httpx``; everything backend-neutral (initialization, cancellation,
failure classification, refresh) lives in :class:`ApiProvider`.
"""

from __future__ import annotations

from typing import List, Tuple

from ..base.api_provider import ApiProvider
from ..base.models import QueryOptions, Turn
from ..base.request import HttpRequestSpec
from ..config.defaults import (
    GEMINI_API_KEY_SETTING,
    GEMINI_DEFAULT_BASE_URL,
    GEMINI_DEFAULT_MODEL,
    GEMINI_MODEL_SETTING,
)
from .parsing import GeminiResponseNormalizer
from .payload import build_generate_content_request

# Lower-cased substrings marking a credential problem.
GEMINI_AUTH_KEYWORDS: Tuple[str, ...] = ("api key", "unauthorized", "permission", "forbidden")


class GeminiApiProvider(ApiProvider):
    """Gemini ``generateContent`` backend.

    The API key is sent as the ``key`` query parameter. ``max_turns`` adds a
    single-candidate ``generationConfig``; prompts blocked by safety filters
    raise ``ContentBlockedError``.
    """

    provider_key = "gemini"
    display_name = "Gemini API"
    backend_label = "Gemini"
    api_key_setting = GEMINI_API_KEY_SETTING
    model_setting = GEMINI_MODEL_SETTING
    default_model = GEMINI_DEFAULT_MODEL
    default_base_url = GEMINI_DEFAULT_BASE_URL
    auth_keywords = GEMINI_AUTH_KEYWORDS
    normalizer_class = GeminiResponseNormalizer

    def build_request(
        self,
        turns: List[Turn],
        *,
        model: str,
        api_key: str,
        options: QueryOptions,
    ) -> HttpRequestSpec:
        return build_generate_content_request(self.base_url, model, api_key, turns, options)


__all__ = ["GeminiApiProvider", "GEMINI_AUTH_KEYWORDS"]
