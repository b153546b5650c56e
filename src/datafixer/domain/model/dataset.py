from __future__ import annotations

from dataclasses import dataclass, field

from .row import Row


@dataclass(slots=True)
class Dataset:
    """Ordered rows plus the header order used for export."""

    headers: tuple[str, ...] = ()
    rows: list[Row] = field(default_factory=list[Row])
    domain_column: str | None = None
    target_columns: list[str] = field(default_factory=list[str])

    @property
    def is_empty(self) -> bool:
        return not self.headers

    def has_column(self, column: str) -> bool:
        return column in self.headers
