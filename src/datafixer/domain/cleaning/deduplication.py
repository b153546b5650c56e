"""Domain-key deduplication."""

from __future__ import annotations

from typing import TYPE_CHECKING

from datafixer.domain.cleaning.pipeline import CleaningPhase

if TYPE_CHECKING:
    from collections.abc import Sequence

    from datafixer.domain.cleaning.pipeline import CleaningReport
    from datafixer.domain.model import Row


def dedup_key(value: str) -> str:
    return value.strip().lower()


def deduplicate_rows(rows: Sequence[Row], domain_column: str) -> list[Row]:
    """Keep the first row for every non-empty domain key, preserving order.

    Rows whose key is empty are never considered duplicates of each other.
    """

    seen: set[str] = set()
    survivors: list[Row] = []
    for row in rows:
        key = dedup_key(row.get(domain_column))
        if not key:
            survivors.append(row)
            continue
        if key in seen:
            continue
        seen.add(key)
        survivors.append(row)
    return survivors


class DeduplicationPhase(CleaningPhase):
    """Drops later rows that share a domain key with an earlier one."""

    name: str = "deduplication"

    def run(self, rows: list[Row], *, domain_column: str, report: CleaningReport) -> list[Row]:
        survivors = deduplicate_rows(rows, domain_column)
        report.duplicates_removed += len(rows) - len(survivors)
        return survivors
