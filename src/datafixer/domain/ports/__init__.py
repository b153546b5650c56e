"""Domain port definitions for adapters."""

from __future__ import annotations

from .enrichment import (
    EnrichmentDirectives,
    EnrichmentProvider,
    EnrichmentRequest,
    EnrichmentResponse,
)

__all__ = [
    "EnrichmentDirectives",
    "EnrichmentProvider",
    "EnrichmentRequest",
    "EnrichmentResponse",
]
