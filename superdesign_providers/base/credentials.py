"""Session-scoped credential holder.

Providers publish their resolved API key here during initialization and on
refresh, under a backend-specific variable name (see
``config.env.SESSION_VARIABLES``). One holder is shared by the providers of
a host session and handed to anything else that needs the active key, such
as a local-binary alternative launched with an environment.

Writes are last-writer-wins per variable. Distinct variable names per
backend keep providers from overwriting each other.
"""
from __future__ import annotations

import os
from typing import Dict, Optional


class SessionCredentials:
    """Mapping of session variable name to credential value.

    Parameters
    ----------
    mirror_environ:
        When True, every publish is also written to ``os.environ`` for hosts
        that spawn child processes expecting the key there. Off by default.
    """

    def __init__(self, *, mirror_environ: bool = False) -> None:
        self._values: Dict[str, str] = {}
        self._mirror_environ = mirror_environ
        self._publish_count = 0

    def publish(self, variable: str, value: str) -> None:
        """Store ``value`` under ``variable`` (overwrites)."""
        self._values[variable] = value
        self._publish_count += 1
        if self._mirror_environ:
            os.environ[variable] = value

    def get(self, variable: str) -> Optional[str]:
        return self._values.get(variable)

    @property
    def publish_count(self) -> int:
        """Total number of publishes since creation."""
        return self._publish_count

    def __contains__(self, variable: object) -> bool:
        return variable in self._values


__all__ = ["SessionCredentials"]
