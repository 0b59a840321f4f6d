"""
QueryOptions DTO carrying the per-query knobs a caller may set.

Only two options are recognized:

- ``custom_system_prompt``: injected as a system-role instruction when it is
  non-empty after trimming.
- ``max_turns``: when set, asks the backend for single-candidate,
  non-verbose generation. It does not limit turn count.

Hosts written against camelCase option bags (``customSystemPrompt``,
``maxTurns``) can pass a mapping to :meth:`QueryOptions.coerce`.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

_ALIASES = {
    "customSystemPrompt": "custom_system_prompt",
    "maxTurns": "max_turns",
}


@dataclass(frozen=True)
class QueryOptions:
    """Per-query options.

    Attributes:
        custom_system_prompt: Optional system instruction text.
        max_turns: Optional turn-limit hint; truthy values request a single
            candidate from backends that support it.
    """

    custom_system_prompt: Optional[str] = None
    max_turns: Optional[int] = None

    @property
    def system_prompt(self) -> Optional[str]:
        """Return the system prompt when it has content after trimming."""
        if self.custom_system_prompt and self.custom_system_prompt.strip():
            return self.custom_system_prompt
        return None

    @classmethod
    def coerce(cls, options: Union["QueryOptions", Mapping[str, Any], None]) -> "QueryOptions":
        """Normalize ``None``, an instance, or a (camel or snake case) mapping.

        Unrecognized keys in a mapping are ignored.
        """
        if options is None:
            return cls()
        if isinstance(options, QueryOptions):
            return options
        values: dict[str, Any] = {}
        for key, value in options.items():
            name = _ALIASES.get(key, key)
            if name in ("custom_system_prompt", "max_turns"):
                values[name] = value
        return cls(**values)


__all__ = ["QueryOptions"]
