"""Layered settings store for providers.

Goals
-----
* Give adapters one ``get(scope_key, setting_name)`` call for credentials
  and model ids, matching the host's key-value settings contract.
* Merge sources in a predictable order (later wins):
    1. Environment variables (see ``config.env.SETTING_ENV_ALIASES``)
    2. Optional external settings file named by ``SUPERDESIGN_SETTINGS_FILE``
    3. In-process overrides written with :meth:`SettingsStore.set`

External Settings File (Optional)
---------------------------------
JSON is tried first, then YAML. Structure example::

    superdesign:
      geminiApiKey: AIza...
      geminiModel: gemini-1.5-flash
      mistralApiKey: ...

Values are returned as stored; trimming and blank detection are the
caller's job.
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .defaults import SETTINGS_FILE_ENV, SETTINGS_SCOPE
from .env import resolve_setting_from_env


def _load_settings_file(path: Optional[str]) -> Dict[str, Any]:
    """Parse the settings file at ``path``; missing or unparsable → ``{}``."""
    if not path:
        return {}
    p = Path(path)
    if not p.is_file():
        return {}
    text = p.read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except ValueError:
        try:
            data = yaml.safe_load(text) or {}
        except yaml.YAMLError:
            data = {}
    return data if isinstance(data, dict) else {}


class SettingsStore:
    """Key-value settings lookup keyed by ``(scope, setting)``.

    Parameters
    ----------
    values:
        Optional initial overrides as ``{scope: {setting: value}}``.
    settings_file:
        Explicit settings file path; defaults to ``$SUPERDESIGN_SETTINGS_FILE``.
    use_env:
        Whether environment variables are consulted at all.
    """

    def __init__(
        self,
        values: Optional[Dict[str, Dict[str, Any]]] = None,
        *,
        settings_file: Optional[str] = None,
        use_env: bool = True,
    ) -> None:
        self._overrides: Dict[str, Dict[str, Any]] = {
            scope: dict(section) for scope, section in (values or {}).items()
        }
        self._settings_file = settings_file
        self._use_env = use_env
        self._file_cache: Optional[Dict[str, Any]] = None

    def _file_section(self, scope_key: str) -> Dict[str, Any]:
        if self._file_cache is None:
            self._file_cache = _load_settings_file(self._settings_file or os.getenv(SETTINGS_FILE_ENV))
        section = self._file_cache.get(scope_key)
        return section if isinstance(section, dict) else {}

    def get(self, scope_key: str, setting_name: str) -> Optional[str]:
        """Return the winning value for a setting, or ``None`` when unset."""
        override = self._overrides.get(scope_key, {})
        if setting_name in override:
            return _as_str(override[setting_name])
        file_section = self._file_section(scope_key)
        if setting_name in file_section:
            return _as_str(file_section[setting_name])
        if self._use_env and scope_key == SETTINGS_SCOPE:
            value, _ = resolve_setting_from_env(setting_name)
            return value
        return None

    def set(self, scope_key: str, setting_name: str, value: Optional[str]) -> None:
        """Write an in-process override; ``None`` removes it."""
        section = self._overrides.setdefault(scope_key, {})
        if value is None:
            section.pop(setting_name, None)
        else:
            section[setting_name] = value

    def reload(self) -> None:
        """Drop the cached settings file so the next lookup re-reads it."""
        self._file_cache = None


def _as_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


__all__ = ["SettingsStore"]
