# tests/unit/test_config.py

import pytest
from pydantic import ValidationError

from dealscout.config import Settings, load_settings
from dealscout.core.errors import ConfigurationError


def test_defaults():
    s = load_settings()
    assert s.llm_provider == "openai"
    assert s.llm_api_key is None
    assert s.llm_base_url == "https://api.groq.com/openai/v1"
    assert s.llm_model == "openai/gpt-oss-20b"
    assert (s.max_phrases, s.max_discovered_urls, s.max_unique_urls) == (6, 20, 10)
    assert (s.max_listings, s.max_analyzed) == (20, 10)
    assert s.profit_threshold == 15000
    assert s.request_timeout_s == 120


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("DEALSCOUT_LLM_PROVIDER", "mock")
    monkeypatch.setenv("DEALSCOUT_PROFIT_THRESHOLD", "25000")
    monkeypatch.setenv("DEALSCOUT_REQUEST_TIMEOUT_S", " 45 ")
    s = load_settings()
    assert s.llm_provider == "mock"
    assert s.profit_threshold == 25000.0
    assert s.request_timeout_s == 45.0


def test_keyword_overrides_win_and_none_is_ignored(monkeypatch):
    monkeypatch.setenv("DEALSCOUT_LLM_PROVIDER", "mock")
    assert load_settings(llm_provider="openai").llm_provider == "openai"
    assert load_settings(llm_provider=None).llm_provider == "mock"


def test_groq_key_fallback(monkeypatch):
    monkeypatch.setenv("GROQ_API_KEY", "gsk-test")
    s = load_settings()
    assert s.llm_api_key == "gsk-test"
    assert s.llm_base_url == "https://api.groq.com/openai/v1"


def test_bare_openai_key_targets_openai(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    s = load_settings()
    assert s.llm_api_key == "sk-test"
    assert s.llm_base_url is None
    assert s.llm_model == "gpt-4o-mini"


def test_invalid_value_raises_configuration_error(monkeypatch):
    monkeypatch.setenv("DEALSCOUT_LLM_PROVIDER", "carrier-pigeon")
    with pytest.raises(ConfigurationError, match="Invalid dealscout settings"):
        load_settings()


def test_require_llm_key():
    with pytest.raises(ConfigurationError, match="API key"):
        Settings().require_llm_key()
    assert Settings(llm_api_key="k").require_llm_key() == "k"


def test_settings_are_frozen():
    s = Settings()
    with pytest.raises(ValidationError):
        s.profit_threshold = 1  # type: ignore[misc]
