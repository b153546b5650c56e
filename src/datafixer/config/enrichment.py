"""Enrichment run defaults."""

from __future__ import annotations

from dataclasses import dataclass

from datafixer.domain.enrichment import DEFAULT_PACING_SECONDS

from .env import optional_env_float


@dataclass(frozen=True, slots=True)
class EnrichmentConfig:
    pacing_seconds: float = DEFAULT_PACING_SECONDS


def get_enrichment_config() -> EnrichmentConfig:
    return EnrichmentConfig(
        pacing_seconds=optional_env_float("DATAFIXER_PACING_SECONDS", DEFAULT_PACING_SECONDS)
    )
