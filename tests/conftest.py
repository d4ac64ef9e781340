"""Pytest configuration for the WebDriver client test suite."""

from __future__ import annotations

import pytest

from tests.support import FakeRemoteEnd, make_config
from webdriverclient.domains.shared.kernel import Session
from webdriverclient.models import config_models
from webdriverclient.models.config_models import Config


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch):
    """Keep local .env files and WEBDRIVER_* variables out of the tests."""
    monkeypatch.setattr(config_models, "_ENV_LOADED", True)
    for name in ("WEBDRIVER_URL", "WEBDRIVER_DIALECT", "WEBDRIVER_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def remote() -> FakeRemoteEnd:
    return FakeRemoteEnd()


@pytest.fixture
def w3c_config(remote) -> Config:
    return make_config(remote, "w3c")


@pytest.fixture
def jwp_config(remote) -> Config:
    return make_config(remote, "jwp")


@pytest.fixture
def w3c_session(w3c_config) -> Session:
    return Session(id="w3c-session-1", config=w3c_config)


@pytest.fixture
def jwp_session(jwp_config) -> Session:
    return Session(id="jwp-session-1", config=jwp_config)
