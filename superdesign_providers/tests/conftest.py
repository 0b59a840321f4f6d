"""Pytest fixtures for the providers base test suite.

Environment variables that the settings layer reads are cleared for every
test so a developer's real keys never leak into assertions.
"""

from __future__ import annotations

from typing import Iterator

import pytest

from superdesign_providers.base import timeouts
from superdesign_providers.base.credentials import SessionCredentials
from superdesign_providers.config.defaults import SETTINGS_FILE_ENV
from superdesign_providers.config.env import SETTING_ENV_ALIASES

from .fakes import FakeSettings, RecordingNotifier, RecordingWorkspace


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for names in SETTING_ENV_ALIASES.values():
        for name in names:
            monkeypatch.delenv(name, raising=False)
    monkeypatch.delenv(SETTINGS_FILE_ENV, raising=False)
    monkeypatch.delenv("PT_TIMEOUT_HTTP_SECONDS", raising=False)
    monkeypatch.delenv("PT_TIMEOUT_CONNECT_SECONDS", raising=False)
    monkeypatch.setattr(timeouts, "_CACHED", None)
    yield


@pytest.fixture()
def settings() -> FakeSettings:
    return FakeSettings({"geminiApiKey": "AIza-test-key"})


@pytest.fixture()
def workspace(tmp_path) -> RecordingWorkspace:
    return RecordingWorkspace(root=str(tmp_path))


@pytest.fixture()
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture()
def credentials() -> SessionCredentials:
    return SessionCredentials()
