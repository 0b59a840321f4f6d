"""Gemini ``generateContent`` request construction.

Wire shape::

    POST {base}/v1beta/models/{model}:generateContent?key={api_key}
    {
      "contents": [{"role": "user", "parts": [{"text": prompt}]}],
      "systemInstruction": {"role": "system", "parts": [{"text": system}]},
      "generationConfig": {"candidateCount": 1, "responseLogprobs": false}
    }

``systemInstruction`` is present only with a system turn and
``generationConfig`` only when ``max_turns`` is truthy. The credential
travels in the query string, never in a header.
"""
from __future__ import annotations

from typing import Any, Dict, List

from ..base.models import QueryOptions, Turn
from ..base.request import HttpRequestSpec

GENERATE_CONTENT_PATH = "/v1beta/models/{model}:generateContent"

# Single-candidate, non-verbose generation.
SINGLE_CANDIDATE_CONFIG: Dict[str, Any] = {"candidateCount": 1, "responseLogprobs": False}


def _content(role: str, text: str) -> Dict[str, Any]:
    return {"role": role, "parts": [{"text": text}]}


def build_generate_content_body(turns: List[Turn], options: QueryOptions) -> Dict[str, Any]:
    """Map ``[system?, user]`` turns onto the Gemini request body."""
    body: Dict[str, Any] = {
        "contents": [_content(t.role, t.content) for t in turns if t.role == "user"],
    }
    system = next((t for t in turns if t.role == "system"), None)
    if system is not None:
        body["systemInstruction"] = _content("system", system.content)
    if options.max_turns:
        body["generationConfig"] = dict(SINGLE_CANDIDATE_CONFIG)
    return body


def build_generate_content_request(
    base_url: str,
    model: str,
    api_key: str,
    turns: List[Turn],
    options: QueryOptions,
) -> HttpRequestSpec:
    """Return the full ``generateContent`` call for one query."""
    url = f"{base_url}{GENERATE_CONTENT_PATH.format(model=model)}?key={api_key}"
    return HttpRequestSpec(
        url=url,
        headers={"Content-Type": "application/json"},
        json_body=build_generate_content_body(turns, options),
    )


__all__ = [
    "GENERATE_CONTENT_PATH",
    "SINGLE_CANDIDATE_CONFIG",
    "build_generate_content_body",
    "build_generate_content_request",
]
