"""Fixtures for the adapter test suite.

Adapters are exercised end to end against ``httpx.MockTransport``; host
collaborators are the in-memory fakes from ``superdesign_providers.tests``.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest

from superdesign_providers.base.credentials import SessionCredentials
from superdesign_providers.tests.fakes import RecordingNotifier, RecordingWorkspace

GOLDEN_DIR = Path(__file__).parent / "providers" / "golden"


@pytest.fixture()
def workspace(tmp_path) -> RecordingWorkspace:
    return RecordingWorkspace(root=str(tmp_path))


@pytest.fixture()
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture()
def credentials() -> SessionCredentials:
    return SessionCredentials()


@pytest.fixture()
def golden() -> Callable[[str], Any]:
    """Load a golden request body by file stem."""

    def _load(name: str) -> Any:
        return json.loads((GOLDEN_DIR / f"{name}.json").read_text(encoding="utf-8"))

    return _load
