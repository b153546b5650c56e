from __future__ import annotations

import asyncio
import json
from collections.abc import Callable  # noqa: TC003

import httpx
import pytest

from datafixer.adapters.gemini import (
    GeminiAPIError,
    GeminiEnrichmentProvider,
    GeminiPayloadError,
)
from datafixer.adapters.http_resilience import ResilienceConfig, ResilientClient
from datafixer.config import GeminiConfig
from datafixer.domain.ports.enrichment import EnrichmentProvider, EnrichmentRequest
from tests.helpers.gemini import make_payload

BASE_URL = "https://gemini.example.test/v1beta/"


def _config() -> GeminiConfig:
    return GeminiConfig(
        api_key="test-key",
        model="gemini-test",
        resilience=ResilienceConfig(
            name="gemini",
            base_url=BASE_URL,
            default_headers={"x-goog-api-key": "test-key"},
        ),
    )


def _make_client_factory(
    handler: Callable[[httpx.Request], httpx.Response],
    created: list[ResilientClient] | None = None,
) -> Callable[[ResilienceConfig], ResilientClient]:
    async def async_handler(request: httpx.Request) -> httpx.Response:
        return handler(request)

    def factory(resilience: ResilienceConfig) -> ResilientClient:
        client = ResilientClient(resilience, transport=httpx.MockTransport(async_handler))
        if created is not None:
            created.append(client)
        return client

    return factory


def _provider(handler: Callable[[httpx.Request], httpx.Response]) -> GeminiEnrichmentProvider:
    return GeminiEnrichmentProvider(config=_config(), client_factory=_make_client_factory(handler))


def test_provider_satisfies_port() -> None:
    provider = _provider(lambda _: httpx.Response(200, json={}))

    assert isinstance(provider, EnrichmentProvider)


def test_enrich_posts_generate_content_request(enrichment_request: EnrichmentRequest) -> None:
    captured: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(
            200,
            json=make_payload(
                {"email": "info@acme.com", "phone": "+1 555 010 2000"},
                chunks=[{"web": {"uri": "https://acme.com/about", "title": "About"}}],
            ),
        )

    response = asyncio.run(_provider(handler).enrich(enrichment_request))

    (request,) = captured
    assert request.method == "POST"
    assert request.url == httpx.URL(f"{BASE_URL}models/gemini-test:generateContent")
    assert request.headers["x-goog-api-key"] == "test-key"
    body = json.loads(request.content)
    assert body["tools"] == [{"google_search": {}}]
    assert response.data == {"email": "info@acme.com", "phone": "+1 555 010 2000"}
    assert [source.uri for source in response.sources] == ["https://acme.com/about"]


def test_enrich_raises_api_error_from_error_payload(
    enrichment_request: EnrichmentRequest,
) -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(
            429,
            json={
                "error": {
                    "code": 429,
                    "message": "Resource has been exhausted",
                    "status": "RESOURCE_EXHAUSTED",
                }
            },
        )

    with pytest.raises(GeminiAPIError) as excinfo:
        asyncio.run(_provider(handler).enrich(enrichment_request))

    assert excinfo.value.code == 429
    assert excinfo.value.status == "RESOURCE_EXHAUSTED"


def test_enrich_raises_http_error_for_non_json_failure(
    enrichment_request: EnrichmentRequest,
) -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="<html>bad gateway</html>")

    with pytest.raises(httpx.HTTPStatusError):
        asyncio.run(_provider(handler).enrich(enrichment_request))


def test_enrich_rejects_blocked_prompt(enrichment_request: EnrichmentRequest) -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"promptFeedback": {"blockReason": "SAFETY"}})

    with pytest.raises(GeminiAPIError, match="SAFETY"):
        asyncio.run(_provider(handler).enrich(enrichment_request))


def test_enrich_rejects_non_json_answer(enrichment_request: EnrichmentRequest) -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=make_payload("Acme is a company."))

    with pytest.raises(GeminiPayloadError):
        asyncio.run(_provider(handler).enrich(enrichment_request))


def test_context_manager_shares_one_client(enrichment_request: EnrichmentRequest) -> None:
    created: list[ResilientClient] = []

    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=make_payload({"email": "a@acme.com"}))

    provider = GeminiEnrichmentProvider(
        config=_config(), client_factory=_make_client_factory(handler, created)
    )

    async def run() -> None:
        async with provider:
            await provider.enrich(enrichment_request)
            await provider.enrich(enrichment_request)

    asyncio.run(run())

    assert len(created) == 1
    assert created[0]._client.is_closed  # noqa: SLF001  # type: ignore[reportPrivateUsage]


def test_one_shot_calls_open_their_own_client(enrichment_request: EnrichmentRequest) -> None:
    created: list[ResilientClient] = []

    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=make_payload({}))

    provider = GeminiEnrichmentProvider(
        config=_config(), client_factory=_make_client_factory(handler, created)
    )

    asyncio.run(provider.enrich(enrichment_request))
    asyncio.run(provider.enrich(enrichment_request))

    assert len(created) == 2
    assert all(client._client.is_closed for client in created)  # noqa: SLF001  # type: ignore[reportPrivateUsage]
