"""Mistral provider package."""

from .client import MISTRAL_AUTH_KEYWORDS, MistralApiProvider
from .parsing import MistralResponseNormalizer

__all__ = ["MistralApiProvider", "MistralResponseNormalizer", "MISTRAL_AUTH_KEYWORDS"]
