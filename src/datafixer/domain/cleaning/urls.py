"""Domain value standardization."""

from __future__ import annotations

from typing import TYPE_CHECKING

from datafixer.domain.cleaning.pipeline import CleaningPhase
from datafixer.domain.model import RowStatus

if TYPE_CHECKING:
    from collections.abc import Sequence

    from datafixer.domain.cleaning.pipeline import CleaningReport
    from datafixer.domain.model import Row

SCHEME_PREFIX = "http"
DEFAULT_SCHEME = "https://"
WWW_PREFIX = "www."


def standardize_url(value: str) -> str:
    """Return ``value`` as an https URL unless it is empty or already has a scheme."""

    if not value or value.startswith(SCHEME_PREFIX):
        return value
    return DEFAULT_SCHEME + value.removeprefix(WWW_PREFIX)


def standardize_urls(rows: Sequence[Row], domain_column: str) -> list[Row]:
    """Rewrite the domain column of every row and reset each row to pending.

    The reset applies to every visited row, whether or not its value changed.
    """

    standardized: list[Row] = []
    for row in rows:
        updated = row.copy(status=RowStatus.PENDING)
        updated.values[domain_column] = standardize_url(row.get(domain_column))
        standardized.append(updated)
    return standardized


class UrlStandardizationPhase(CleaningPhase):
    """Prefixes bare domains with ``https://``."""

    name: str = "url_standardization"

    def run(self, rows: list[Row], *, domain_column: str, report: CleaningReport) -> list[Row]:
        standardized = standardize_urls(rows, domain_column)
        report.urls_rewritten += sum(
            1
            for before, after in zip(rows, standardized, strict=True)
            if before.get(domain_column) != after.get(domain_column)
        )
        return standardized
