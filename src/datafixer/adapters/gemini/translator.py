"""Translate between enrichment requests and Gemini payloads."""

from __future__ import annotations

import json
from logging import getLogger
from typing import TYPE_CHECKING, cast

from datafixer.domain.model import SourceKind, SourceRecord
from datafixer.domain.ports.enrichment import EnrichmentResponse

if TYPE_CHECKING:
    from datafixer.domain.ports.enrichment import EnrichmentRequest

    from .schema import GenerateContentResponse, GroundingChunk

log = getLogger(__name__)


class GeminiPayloadError(ValueError):
    """Raised when the model answer is not a JSON object of column values."""


def build_prompt(request: EnrichmentRequest) -> str:
    instructions = [
        "Research the company associated with the domain using Google Search.",
        "Fill in missing values for the requested fields.",
        (
            "If current data exists but looks incorrect (for example placeholder text), "
            "overwrite it with accurate information."
        ),
    ]
    if request.directives.validate_emails:
        instructions.append("Ensure any email addresses follow standard format.")
    if request.directives.validate_phones:
        instructions.append("Standardize phone numbers to international format if possible.")
    instructions.append(
        "Return a strictly valid JSON object. If a value is unknown, use an empty string."
    )
    numbered = "\n".join(f"{number}. {text}" for number, text in enumerate(instructions, 1))

    return (
        "Task: Data Enrichment and Validation.\n"
        f'Target Domain: "{request.domain}"\n'
        f"Fields to find/fix: {', '.join(request.target_columns)}\n"
        f"Current Data Context: {json.dumps(dict(request.context), ensure_ascii=False)}\n"
        "\n"
        "Instructions:\n"
        f"{numbered}"
    )


def build_request_payload(request: EnrichmentRequest) -> dict[str, object]:
    return {
        "contents": [{"role": "user", "parts": [{"text": build_prompt(request)}]}],
        "tools": [{"google_search": {}}],
        "generationConfig": {
            "responseMimeType": "application/json",
            "responseSchema": {
                "type": "OBJECT",
                "properties": {column: {"type": "STRING"} for column in request.target_columns},
            },
        },
    }


def parse_enrichment_response(payload: GenerateContentResponse) -> EnrichmentResponse:
    text = payload.text.strip() or "{}"
    try:
        decoded = json.loads(text)
    except json.JSONDecodeError as exc:
        raise GeminiPayloadError(f"Model answer is not valid JSON: {exc}") from exc
    if not isinstance(decoded, dict):
        raise GeminiPayloadError("Model answer is not a JSON object")

    data = {
        str(key): _coerce_value(value)
        for key, value in cast(dict[object, object], decoded).items()
    }
    return EnrichmentResponse(data=data, sources=extract_sources(payload))


def extract_sources(payload: GenerateContentResponse) -> list[SourceRecord]:
    if not payload.candidates:
        return []
    metadata = payload.candidates[0].grounding_metadata
    if metadata is None:
        return []
    sources: list[SourceRecord] = []
    for chunk in metadata.grounding_chunks:
        source = _chunk_to_source(chunk)
        if source is not None:
            sources.append(source)
    return sources


def _chunk_to_source(chunk: GroundingChunk) -> SourceRecord | None:
    if chunk.web is not None and chunk.web.uri:
        return SourceRecord(uri=chunk.web.uri, title=chunk.web.title, kind=SourceKind.WEB)
    if chunk.maps is not None and chunk.maps.uri:
        return SourceRecord(uri=chunk.maps.uri, title=chunk.maps.title, kind=SourceKind.MAPS)
    log.debug("Skipping grounding chunk without uri: %s", chunk)
    return None


def _coerce_value(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (list, dict)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)
