"""Gemini enrichment adapter."""

from __future__ import annotations

from .client import GeminiAPIError, GeminiEnrichmentProvider
from .schema import GenerateContentResponse
from .translator import (
    GeminiPayloadError,
    build_prompt,
    build_request_payload,
    parse_enrichment_response,
)

__all__ = [
    "GeminiAPIError",
    "GeminiEnrichmentProvider",
    "GeminiPayloadError",
    "GenerateContentResponse",
    "build_prompt",
    "build_request_payload",
    "parse_enrichment_response",
]
