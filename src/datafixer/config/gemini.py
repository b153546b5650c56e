"""Gemini provider configuration values."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .env import optional_env_float, optional_env_int, require_env_vars
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

DEFAULT_GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/"
DEFAULT_GEMINI_MODEL = "gemini-3-pro-preview"
DEFAULT_GEMINI_TIMEOUT_SECONDS = 120.0
DEFAULT_GEMINI_MAX_CALLS_PER_MINUTE = 60


@dataclass(frozen=True, slots=True)
class GeminiConfig:
    """Holds Gemini API configuration values."""

    api_key: str
    model: str
    resilience: ResilienceConfig


def get_gemini_config(*, resilience: ResilienceConfig | None = None) -> GeminiConfig:
    values = require_env_vars(("GEMINI_API_KEY",))
    model = (os.getenv("GEMINI_MODEL") or "").strip() or DEFAULT_GEMINI_MODEL
    base_url = (os.getenv("GEMINI_BASE_URL") or "").strip() or DEFAULT_GEMINI_BASE_URL
    timeout = optional_env_float(
        "GEMINI_TIMEOUT_SECONDS", DEFAULT_GEMINI_TIMEOUT_SECONDS, minimum=1.0
    )
    calls_per_minute = optional_env_int(
        "GEMINI_MAX_CALLS_PER_MINUTE", DEFAULT_GEMINI_MAX_CALLS_PER_MINUTE, minimum=1
    )
    retries = optional_env_int("GEMINI_RETRIES", 0)

    return GeminiConfig(
        api_key=values["GEMINI_API_KEY"],
        model=model,
        resilience=resilience
        or ResilienceConfig(
            name="gemini",
            base_url=base_url,
            timeout_seconds=timeout,
            ratelimit=RateLimit(max_calls=calls_per_minute, per_seconds=60.0),
            retry=RetryPolicy(total=retries),
            default_headers={"x-goog-api-key": values["GEMINI_API_KEY"]},
        ),
    )
