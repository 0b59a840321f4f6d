"""Mistral chat-completions request construction.

Wire shape::

    POST {base}/v1/chat/completions
    Authorization: Bearer {api_key}
    {"model": ..., "messages": [{"role", "content"}...], "stream": false,
     "temperature": 0.7}

``max_turns`` has no Mistral equivalent and is ignored.
"""
from __future__ import annotations

from typing import Any, Dict, List

from ..base.models import Turn
from ..base.request import HttpRequestSpec
from ..config.defaults import MISTRAL_DEFAULT_TEMPERATURE

CHAT_COMPLETIONS_PATH = "/v1/chat/completions"


def build_chat_body(turns: List[Turn], model: str) -> Dict[str, Any]:
    return {
        "model": model,
        "messages": [t.to_dict() for t in turns],
        "stream": False,
        "temperature": MISTRAL_DEFAULT_TEMPERATURE,
    }


def build_chat_request(base_url: str, model: str, api_key: str, turns: List[Turn]) -> HttpRequestSpec:
    """Return the full chat-completions call for one query."""
    return HttpRequestSpec(
        url=f"{base_url}{CHAT_COMPLETIONS_PATH}",
        headers={
            "Content-Type": "application/json",
            "Authorization": f"Bearer {api_key}",
        },
        json_body=build_chat_body(turns, model),
    )


__all__ = ["CHAT_COMPLETIONS_PATH", "build_chat_body", "build_chat_request"]
