"""Application configuration helpers."""

from __future__ import annotations

from .enrichment import DEFAULT_PACING_SECONDS, EnrichmentConfig, get_enrichment_config
from .env import optional_env_float, optional_env_int, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .gemini import DEFAULT_GEMINI_MODEL, GeminiConfig, get_gemini_config
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging

__all__ = [
    "DEFAULT_GEMINI_MODEL",
    "DEFAULT_PACING_SECONDS",
    "ConfigurationError",
    "EnrichmentConfig",
    "GeminiConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "configure_logging",
    "get_enrichment_config",
    "get_gemini_config",
    "optional_env_float",
    "optional_env_int",
    "require_env_vars",
]
