"""HTTP enrichment provider backed by the Gemini API."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from datafixer.adapters.http_resilience import ResilienceConfig, ResilientClient
from datafixer.config.gemini import GeminiConfig, get_gemini_config
from datafixer.domain.ports.enrichment import EnrichmentProvider

from .schema import ErrorResponse, GenerateContentResponse
from .translator import build_request_payload, parse_enrichment_response

if TYPE_CHECKING:
    from types import TracebackType

    from datafixer.domain.ports.enrichment import EnrichmentRequest, EnrichmentResponse

log = getLogger(__name__)


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


class GeminiAPIError(RuntimeError):
    """Raised when the Gemini API answers with an error or an unusable payload."""

    def __init__(
        self, message: str, *, code: int | None = None, status: str | None = None
    ) -> None:
        super().__init__(message)
        self.code = code
        self.status = status


@dataclass(slots=True)
class GeminiEnrichmentProvider:
    """Research one domain per call with the Google Search tool enabled.

    Entering the provider as an async context manager shares one HTTP client
    (and its rate limiter) across calls; otherwise each call opens its own.
    """

    config: GeminiConfig = field(default_factory=get_gemini_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )
    _client: ResilientClient | None = field(default=None, init=False, repr=False)

    async def __aenter__(self) -> GeminiEnrichmentProvider:
        if self._client is None:
            self._client = self.client_factory(self.config.resilience)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def enrich(self, request: EnrichmentRequest) -> EnrichmentResponse:
        if self._client is not None:
            return await self._perform_request(client=self._client, request=request)
        async with self.client_factory(self.config.resilience) as client:
            return await self._perform_request(client=client, request=request)

    async def _perform_request(
        self,
        *,
        client: ResilientClient,
        request: EnrichmentRequest,
    ) -> EnrichmentResponse:
        response = await client.post(
            f"models/{self.config.model}:generateContent",
            json=build_request_payload(request),
        )

        payload = _decode_json(response)
        if isinstance(payload, dict) and "error" in payload:
            error_payload = ErrorResponse.model_validate(payload)
            log.error(
                "Gemini API error %s (%s): %s",
                error_payload.error.code,
                error_payload.error.status,
                error_payload.error.message,
            )
            raise GeminiAPIError(
                error_payload.error.message,
                code=error_payload.error.code,
                status=error_payload.error.status,
            )
        response.raise_for_status()

        if not isinstance(payload, dict):
            raise GeminiAPIError("Unexpected Gemini response payload")
        try:
            parsed = GenerateContentResponse.model_validate(payload)
        except ValidationError as exc:
            raise GeminiAPIError(f"Malformed Gemini response: {exc}") from exc

        if not parsed.candidates:
            reason = parsed.prompt_feedback.block_reason if parsed.prompt_feedback else None
            raise GeminiAPIError(f"Gemini returned no candidates (block reason: {reason})")

        return parse_enrichment_response(parsed)


def _decode_json(response: httpx.Response) -> object:
    try:
        return response.json()
    except ValueError:
        response.raise_for_status()
        raise GeminiAPIError("Gemini response is not JSON") from None


if TYPE_CHECKING:
    _provider_check: EnrichmentProvider = GeminiEnrichmentProvider()
