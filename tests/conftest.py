from __future__ import annotations

import pytest

from tests.utils import FakeWeb, ScriptedProvider, make_settings

_ENV_VARS = (
    "DEALSCOUT_LLM_PROVIDER",
    "DEALSCOUT_LLM_API_KEY",
    "DEALSCOUT_LLM_BASE_URL",
    "DEALSCOUT_LLM_MODEL",
    "DEALSCOUT_PROFIT_THRESHOLD",
    "DEALSCOUT_REQUEST_TIMEOUT_S",
    "DEALSCOUT_DEBUG",
    "GROQ_API_KEY",
    "OPENAI_API_KEY",
    "OPENAI_MODEL",
)


# -------- Isolated environment --------
@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """No test sees the developer's real keys or overrides."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield


# -------- Collaborators --------
@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def provider_factory():
    """
    Usage:
        provider = provider_factory(analysis=estimate_by_price({...}))
    """

    def _factory(**replies):
        return ScriptedProvider(**replies)

    return _factory


@pytest.fixture
def fake_web_factory():
    """
    Usage:
        web = fake_web_factory(searches={search_q("homes in Miami"): html}, pages={url: html})
    """

    def _factory(*, searches=None, pages=None):
        return FakeWeb(searches=searches, pages=pages)

    return _factory


# -------- Pytest markers --------
def pytest_configure(config):
    config.addinivalue_line("markers", "integration: marks integration tests")
