"""Backend-neutral request building blocks.

``build_turns`` produces the ordered conversation turns every backend
starts from; each backend's ``payload`` module maps them onto its own wire
envelope and returns an :class:`HttpRequestSpec`.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .models import QueryOptions, Turn

_KEY_PARAM = re.compile(r"([?&]key=)[^&]*")


def build_turns(prompt: Optional[str], options: QueryOptions) -> List[Turn]:
    """Return ``[system?, user]`` turns for a single query.

    The system turn is present only when the system prompt has content
    after trimming. A ``None`` prompt is sent as the empty string.
    """
    turns: List[Turn] = []
    system = options.system_prompt
    if system is not None:
        turns.append(Turn(role="system", content=system))
    turns.append(Turn(role="user", content=prompt or ""))
    return turns


@dataclass(frozen=True)
class HttpRequestSpec:
    """A fully-resolved HTTP call ready for the transport.

    Attributes:
        url: Absolute endpoint URL (may embed the credential as ``key=``).
        headers: Request headers (may carry a bearer credential).
        json_body: JSON-serializable request body.
        method: HTTP method; always ``POST`` for the supported backends.
    """

    url: str
    headers: Dict[str, str]
    json_body: Dict[str, Any]
    method: str = "POST"

    def redacted_url(self) -> str:
        """Return ``url`` with any ``key=`` query value masked for logging."""
        return _KEY_PARAM.sub(r"\1***", self.url)


__all__ = ["build_turns", "HttpRequestSpec"]
