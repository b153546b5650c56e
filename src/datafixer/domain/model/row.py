"""Row record carrying data columns plus reserved pipeline metadata."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .enums import RowStatus

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from .source import SourceRecord


@dataclass(eq=False, kw_only=True)
class Row:
    """A single dataset row.

    Data columns live in ``values`` and are the only part that is ever exported.
    Keys that are not dataset headers (for example extra fields a provider
    returned) are kept in ``extras``. Pipeline metadata are plain attributes, so
    a column named ``status`` or ``sources`` can never shadow them.
    """

    values: dict[str, str] = field(default_factory=dict[str, str])
    extras: dict[str, str] = field(default_factory=dict[str, str])
    status: RowStatus = RowStatus.PENDING
    sources: list[SourceRecord] = field(default_factory=list["SourceRecord"])
    validation_errors: list[str] = field(default_factory=list[str])

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, str], headers: Iterable[str]) -> Row:
        """Build a pending row holding one value per header (missing -> empty)."""

        return cls(values={header: mapping.get(header, "") for header in headers})

    def get(self, column: str) -> str:
        return self.values.get(column, "")

    def copy(self, *, status: RowStatus | None = None) -> Row:
        return Row(
            values=dict(self.values),
            extras=dict(self.extras),
            status=self.status if status is None else status,
            sources=list(self.sources),
            validation_errors=list(self.validation_errors),
        )

    def snapshot(self) -> dict[str, str]:
        """Flat view of the row's data (metadata excluded)."""

        return {**self.extras, **self.values}
