"""Fixtures compartidas."""

from __future__ import annotations

from pathlib import Path

import pytest

from progress_sync.config import Config, set_config
from progress_sync.core import SyncCoordinator, UserSettings
from progress_sync.notify import NotificationLog
from progress_sync.store import MemoryLocalStore

from fakes import FakeAuth, FakeServer


@pytest.fixture
def config(tmp_path: Path) -> Config:
    config = Config(data_dir=tmp_path, max_renewals=2, max_merge_rounds=3)
    set_config(config)
    return config


@pytest.fixture
def server() -> FakeServer:
    return FakeServer()


@pytest.fixture
def auth() -> FakeAuth:
    return FakeAuth()


@pytest.fixture
def store() -> MemoryLocalStore:
    return MemoryLocalStore()


@pytest.fixture
def notifier() -> NotificationLog:
    return NotificationLog()


@pytest.fixture
def make_coordinator(config, server, auth, store, notifier):
    """Construir un coordinador con las dependencias de prueba."""

    def _make(**overrides) -> SyncCoordinator:
        kwargs = {
            "store": store,
            "remote": server,
            "auth": auth,
            "notifier": notifier,
            "settings": UserSettings(),
            "config": config,
        }
        kwargs.update(overrides)
        return SyncCoordinator(**kwargs)

    return _make


@pytest.fixture
def online(make_coordinator) -> SyncCoordinator:
    return make_coordinator()


@pytest.fixture
def offline(make_coordinator, auth) -> SyncCoordinator:
    auth.token = None
    return make_coordinator()
