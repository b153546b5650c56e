from __future__ import annotations

from dataclasses import dataclass

from .enums import SourceKind


@dataclass(frozen=True, slots=True)
class SourceRecord:
    """Attribution for an enriched value: a reference URI plus an optional title."""

    uri: str
    title: str | None = None
    kind: SourceKind = SourceKind.WEB

    @property
    def label(self) -> str:
        return self.title or self.uri
