"""
Turn DTO used by the request builders.

A ``Turn`` is one role-tagged unit of a backend's conversation payload.
Builders produce at most one system turn followed by exactly one user turn;
each backend then maps the list onto its own envelope.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

Role = Literal["system", "user"]


@dataclass(frozen=True)
class Turn:
    """A single role-tagged conversation turn.

    Attributes:
        role: ``"system"`` for the instruction turn, ``"user"`` for the prompt.
        content: Text carried by the turn, sent exactly as supplied.
    """

    role: Role
    content: str

    def to_dict(self) -> dict:
        """Return the flat ``{"role", "content"}`` shape."""
        return {"role": self.role, "content": self.content}


__all__ = ["Turn", "Role"]
