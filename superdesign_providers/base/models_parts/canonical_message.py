"""
CanonicalMessage DTO: the one output shape every backend produces.

The text-bearing fields ``message``, ``content`` and ``text`` always carry
the same value so downstream consumers keyed on any one of them
interoperate.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict

from ..constants import ASSISTANT_ROLE


@dataclass(frozen=True)
class CanonicalMessage:
    """Normalized assistant message.

    Attributes:
        type: Always ``"assistant"``.
        role: Always ``"assistant"``.
        message: Extracted assistant text.
        content: Same value as ``message``.
        text: Same value as ``message``; trimmed and possibly empty.

    An empty ``text`` means the backend returned no usable content. Such a
    message is still returned to the caller but never streamed.
    """

    type: str
    role: str
    message: str
    content: str
    text: str

    @classmethod
    def from_text(cls, text: str) -> "CanonicalMessage":
        """Build a message whose four text fields all equal ``text``."""
        return cls(type=ASSISTANT_ROLE, role=ASSISTANT_ROLE, message=text, content=text, text=text)

    @property
    def is_empty(self) -> bool:
        return not self.text

    def to_dict(self) -> Dict[str, Any]:
        """Return the plain ``{type, role, message, content, text}`` mapping."""
        return asdict(self)


__all__ = ["CanonicalMessage"]
