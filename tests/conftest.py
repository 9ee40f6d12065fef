"""Shared fixtures: fresh registry, database doubles and settings overrides."""

import os
from types import SimpleNamespace

import pytest

from docmapper.config import zones
from docmapper.config.registry import Config, set_config
from docmapper.config.settings import get_settings
from tests.doubles import make_db


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Isolate tests from DOCMAPPER_* variables and cached settings/registry."""
    for key in list(os.environ):
        if key.upper().startswith("DOCMAPPER_"):
            monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    set_config(None)
    yield
    get_settings.cache_clear()
    set_config(None)


@pytest.fixture
def config() -> Config:
    return Config()


@pytest.fixture
def local_time(monkeypatch):
    """Pin the local clock: local_time(gmtoff_seconds, is_dst)."""

    def _pin(gmtoff: int, isdst: int) -> None:
        monkeypatch.setattr(zones, "_localtime", lambda: SimpleNamespace(tm_gmtoff=gmtoff, tm_isdst=isdst))

    return _pin


@pytest.fixture
def connect():
    """Fake connect callable recording (name, host, port, read_only) for each handle."""
    calls: list[tuple] = []

    def _connect(name, host="localhost", port=27017, read_only=False):
        calls.append((name, host, port, read_only))
        return make_db(name)

    _connect.calls = calls
    return _connect
