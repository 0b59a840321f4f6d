"""Host collaborator contracts and default implementations.

The provider core reaches the hosting application only through these narrow
interfaces:

- ``CredentialStore``: key-value settings lookup.
- ``WorkspaceResolver``: project root discovery and directory creation.
- ``Notifier``: fire-and-forget user-visible error messages.
- ``StreamCallback``: caller-supplied sink for the canonical message.

The defaults below let the library run stand-alone (scripts, tests); an
editor or service host supplies its own implementations.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional, Protocol, Union, runtime_checkable

from .logging import get_logger
from .models import CanonicalMessage

StreamCallback = Callable[[CanonicalMessage], None]


@runtime_checkable
class CredentialStore(Protocol):
    """Key-value settings lookup."""

    def get(self, scope_key: str, setting_name: str) -> Optional[str]:
        """Return the raw stored value or ``None`` when unset."""
        ...


@runtime_checkable
class WorkspaceResolver(Protocol):
    """Project root discovery and idempotent directory creation."""

    def current_project_root(self) -> Optional[str]:
        """Return the open project's root path, or ``None``."""
        ...

    def ensure_directory(self, path: str) -> None:
        """Create ``path`` and missing parents; no-op when it exists."""
        ...


@runtime_checkable
class Notifier(Protocol):
    """User-visible error surface."""

    def show_error(self, message: str) -> None:
        ...


class LocalWorkspace:
    """Filesystem-backed :class:`WorkspaceResolver`.

    ``root`` is the project root reported to providers; ``None`` means no
    project is open and providers fall back to a temp directory.
    """

    def __init__(self, root: Union[str, Path, None] = None) -> None:
        self._root = str(root) if root is not None else None

    def current_project_root(self) -> Optional[str]:
        return self._root

    def ensure_directory(self, path: str) -> None:
        Path(path).mkdir(parents=True, exist_ok=True)


class LogNotifier:
    """:class:`Notifier` that writes user-facing errors to a logger."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self._logger = logger or get_logger("superdesign_providers.notify")

    def show_error(self, message: str) -> None:
        self._logger.error(message)


__all__ = [
    "StreamCallback",
    "CredentialStore",
    "WorkspaceResolver",
    "Notifier",
    "LocalWorkspace",
    "LogNotifier",
]
