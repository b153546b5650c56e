"""Shared fixtures for Gemini adapter tests."""

from __future__ import annotations

import pytest

from datafixer.domain.ports.enrichment import EnrichmentDirectives, EnrichmentRequest


@pytest.fixture
def enrichment_request() -> EnrichmentRequest:
    return EnrichmentRequest(
        domain="https://acme.com",
        target_columns=("email", "phone"),
        context={"company": "Acme", "website": "https://acme.com", "email": "placeholder"},
        directives=EnrichmentDirectives(),
    )
