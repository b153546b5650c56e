"""Aggregate progress derived from row states."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from datafixer.domain.errors import StatusInvariantError
from datafixer.domain.model import RowStatus

if TYPE_CHECKING:
    from collections.abc import Iterable

    from datafixer.domain.model import Row


@dataclass(frozen=True, slots=True)
class EnrichmentStatus:
    total: int = 0
    completed: int = 0
    failed: int = 0
    is_processing: bool = False
    in_flight: int = 0

    def __post_init__(self) -> None:
        if min(self.total, self.completed, self.failed, self.in_flight) < 0:
            raise StatusInvariantError(f"Negative counter in {self!r}")
        if self.completed + self.failed + self.in_flight > self.total:
            raise StatusInvariantError(
                f"completed={self.completed} + failed={self.failed} + "
                f"in_flight={self.in_flight} exceeds total={self.total}"
            )

    @property
    def done(self) -> int:
        return self.completed + self.failed

    @property
    def pending(self) -> int:
        return self.total - self.done - self.in_flight

    @property
    def progress(self) -> float:
        if self.total == 0:
            return 0.0
        return self.done / self.total


def summarize_rows(rows: Iterable[Row], *, is_processing: bool = False) -> EnrichmentStatus:
    """Project the current row states into an ``EnrichmentStatus``."""

    total = completed = failed = in_flight = 0
    for row in rows:
        total += 1
        if row.status is RowStatus.COMPLETED:
            completed += 1
        elif row.status is RowStatus.FAILED:
            failed += 1
        elif row.status is RowStatus.PROCESSING:
            in_flight += 1
    return EnrichmentStatus(
        total=total,
        completed=completed,
        failed=failed,
        is_processing=is_processing,
        in_flight=in_flight,
    )


class StatusTracker:
    """Advisory counters fed by orchestrator events.

    The counters exist for cheap progress reporting; ``verify`` checks them
    against the projection of the row states, which stays authoritative.
    """

    def __init__(self, total: int = 0) -> None:
        self.total = total
        self.completed = 0
        self.failed = 0
        self.in_flight = 0
        self.is_processing = False

    def begin(self, total: int) -> None:
        self.total = total
        self.completed = 0
        self.failed = 0
        self.in_flight = 0
        self.is_processing = True

    def row_started(self) -> None:
        self.in_flight += 1

    def row_completed(self) -> None:
        self.in_flight -= 1
        self.completed += 1

    def row_failed(self) -> None:
        self.in_flight -= 1
        self.failed += 1

    def finish(self) -> None:
        self.is_processing = False

    def snapshot(self) -> EnrichmentStatus:
        return EnrichmentStatus(
            total=self.total,
            completed=self.completed,
            failed=self.failed,
            is_processing=self.is_processing,
            in_flight=self.in_flight,
        )

    def verify(self, rows: Iterable[Row]) -> EnrichmentStatus:
        """Return the row projection, raising if the counters drifted from it."""

        derived = summarize_rows(rows, is_processing=self.is_processing)
        if derived != self.snapshot():
            raise StatusInvariantError(f"Counters {self.snapshot()!r} drifted from {derived!r}")
        return derived
