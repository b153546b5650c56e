"""Port definitions for row enrichment providers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping

    from datafixer.domain.model import SourceRecord


@dataclass(frozen=True, slots=True)
class EnrichmentDirectives:
    validate_emails: bool = True
    validate_phones: bool = True


@dataclass(frozen=True, slots=True)
class EnrichmentRequest:
    """One enrichment attempt for a row with a non-empty domain."""

    domain: str
    target_columns: tuple[str, ...]
    context: Mapping[str, str]
    directives: EnrichmentDirectives = field(default_factory=EnrichmentDirectives)

    def __post_init__(self) -> None:
        if not self.domain.strip():
            raise ValueError("Enrichment requires a non-empty domain")


@dataclass(slots=True)
class EnrichmentResponse:
    """Values found for the requested columns plus their attribution.

    Unknown values are empty strings rather than missing keys.
    """

    data: dict[str, str] = field(default_factory=dict[str, str])
    sources: list[SourceRecord] = field(default_factory=list["SourceRecord"])


@runtime_checkable
class EnrichmentProvider(Protocol):
    """Async port for researching the missing fields of one row.

    Any exception raised by ``enrich`` fails only the row being processed.
    """

    async def enrich(self, request: EnrichmentRequest) -> EnrichmentResponse: ...


__all__ = [
    "EnrichmentDirectives",
    "EnrichmentProvider",
    "EnrichmentRequest",
    "EnrichmentResponse",
]
