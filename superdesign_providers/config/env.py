"""superdesign_providers.config.env
==============================

Environment variable names used by the provider layer.

Two separate concerns live here:

- ``SETTING_ENV_ALIASES`` maps a setting name to the environment variables
  the :class:`~superdesign_providers.config.SettingsStore` consults as a
  fallback source, canonical name first.
- ``SESSION_VARIABLES`` names the session-scoped credential variable each
  backend publishes its key under. The names are distinct per backend so
  concurrent refreshes of different providers never overwrite each other.

Helpers never raise on unknown names; they return ``None``/empty results
and leave the decision to the caller.
"""

from __future__ import annotations

import os
from typing import Dict, Iterable, Optional, Tuple

from .defaults import (
    GEMINI_API_KEY_SETTING,
    GEMINI_MODEL_SETTING,
    MISTRAL_API_KEY_SETTING,
    MISTRAL_MODEL_SETTING,
)

# Setting name → ordered env var names (canonical first)
SETTING_ENV_ALIASES: Dict[str, Tuple[str, ...]] = {
    GEMINI_API_KEY_SETTING: ("GEMINI_API_KEY", "GOOGLE_API_KEY"),
    GEMINI_MODEL_SETTING: ("GEMINI_MODEL",),
    MISTRAL_API_KEY_SETTING: ("MISTRAL_API_KEY",),
    MISTRAL_MODEL_SETTING: ("MISTRAL_MODEL",),
}

# Provider key → session credential variable
SESSION_VARIABLES: Dict[str, str] = {
    "gemini": "GOOGLE_GENERATIVE_AI_API_KEY",
    "mistral": "MISTRAL_API_KEY",
}


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the string looks like a placeholder/test value.

    Heuristics: contains 'placeholder', 'changeme', 'example', or starts with
    'test_'. Case-insensitive; surrounding spaces are ignored.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return (
        "placeholder" in v
        or "changeme" in v
        or "example" in v
        or v.startswith("test_")
    )


def get_env_var_candidates(setting_name: str) -> Iterable[str]:
    """Yield env var names for a setting in priority order."""
    yield from SETTING_ENV_ALIASES.get(setting_name, ())


def resolve_setting_from_env(setting_name: str) -> Tuple[Optional[str], Optional[str]]:
    """Return ``(value, env_var_used)`` for the first real value found.

    Empty values and placeholders are skipped. ``(None, None)`` when nothing
    usable is set.
    """
    for name in get_env_var_candidates(setting_name):
        val = os.environ.get(name)
        if val and val.strip() and not is_placeholder(val):
            return val, name
    return None, None


def get_session_variable(provider: str) -> Optional[str]:
    """Return the session credential variable for a provider key."""
    return SESSION_VARIABLES.get((provider or "").lower())


__all__ = [
    "SETTING_ENV_ALIASES",
    "SESSION_VARIABLES",
    "is_placeholder",
    "get_env_var_candidates",
    "resolve_setting_from_env",
    "get_session_variable",
]
