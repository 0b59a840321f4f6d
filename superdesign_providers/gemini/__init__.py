"""Gemini provider package."""

from .client import GEMINI_AUTH_KEYWORDS, GeminiApiProvider
from .parsing import GeminiResponseNormalizer

__all__ = ["GeminiApiProvider", "GeminiResponseNormalizer", "GEMINI_AUTH_KEYWORDS"]
