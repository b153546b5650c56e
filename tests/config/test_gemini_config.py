from __future__ import annotations

import pytest

from datafixer.config import (
    DEFAULT_GEMINI_MODEL,
    DEFAULT_PACING_SECONDS,
    ConfigurationError,
    MissingConfigurationError,
    ResilienceConfig,
    get_enrichment_config,
    get_gemini_config,
)


def test_gemini_config_requires_api_key() -> None:
    with pytest.raises(MissingConfigurationError, match="GEMINI_API_KEY"):
        get_gemini_config()


def test_gemini_config_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GEMINI_API_KEY", "key-123")

    config = get_gemini_config()

    assert config.api_key == "key-123"
    assert config.model == DEFAULT_GEMINI_MODEL
    resilience = config.resilience
    assert resilience.name == "gemini"
    assert resilience.base_url == "https://generativelanguage.googleapis.com/v1beta/"
    assert resilience.timeout_seconds == 120.0
    assert resilience.ratelimit is not None
    assert resilience.ratelimit.max_calls == 60
    assert resilience.ratelimit.per_seconds == 60.0
    assert resilience.retry.total == 0
    assert resilience.default_headers == {"x-goog-api-key": "key-123"}


def test_gemini_config_reads_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GEMINI_API_KEY", "key-123")
    monkeypatch.setenv("GEMINI_MODEL", "gemini-flash")
    monkeypatch.setenv("GEMINI_BASE_URL", "http://localhost:8080/")
    monkeypatch.setenv("GEMINI_TIMEOUT_SECONDS", "15")
    monkeypatch.setenv("GEMINI_MAX_CALLS_PER_MINUTE", "10")
    monkeypatch.setenv("GEMINI_RETRIES", "2")

    config = get_gemini_config()

    assert config.model == "gemini-flash"
    assert config.resilience.base_url == "http://localhost:8080/"
    assert config.resilience.timeout_seconds == 15.0
    assert config.resilience.ratelimit is not None
    assert config.resilience.ratelimit.max_calls == 10
    assert config.resilience.retry.total == 2


def test_gemini_config_rejects_zero_rate(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GEMINI_API_KEY", "key-123")
    monkeypatch.setenv("GEMINI_MAX_CALLS_PER_MINUTE", "0")

    with pytest.raises(ConfigurationError):
        get_gemini_config()


def test_gemini_config_accepts_explicit_resilience(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GEMINI_API_KEY", "key-123")
    resilience = ResilienceConfig(name="custom")

    assert get_gemini_config(resilience=resilience).resilience is resilience


def test_enrichment_config_pacing(monkeypatch: pytest.MonkeyPatch) -> None:
    assert get_enrichment_config().pacing_seconds == DEFAULT_PACING_SECONDS == 0.3

    monkeypatch.setenv("DATAFIXER_PACING_SECONDS", "0")
    assert get_enrichment_config().pacing_seconds == 0.0


def test_enrichment_config_rejects_non_finite_pacing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATAFIXER_PACING_SECONDS", "nan")

    with pytest.raises(ConfigurationError, match="finite"):
        get_enrichment_config()
