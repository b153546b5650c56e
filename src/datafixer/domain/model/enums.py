"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class RowStatus(StrEnum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in {RowStatus.COMPLETED, RowStatus.FAILED}


class SourceKind(StrEnum):
    WEB = "web"
    MAPS = "maps"
