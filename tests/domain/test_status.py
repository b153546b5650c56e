from __future__ import annotations

import pytest

from datafixer.domain.errors import StatusInvariantError
from datafixer.domain.model import Row, RowStatus
from datafixer.domain.status import EnrichmentStatus, StatusTracker, summarize_rows


def _rows(*statuses: RowStatus) -> list[Row]:
    return [Row(status=status) for status in statuses]


def test_summarize_rows_counts_each_state() -> None:
    rows = _rows(
        RowStatus.COMPLETED,
        RowStatus.FAILED,
        RowStatus.PROCESSING,
        RowStatus.PENDING,
        RowStatus.COMPLETED,
    )

    status = summarize_rows(rows, is_processing=True)

    assert status == EnrichmentStatus(
        total=5, completed=2, failed=1, is_processing=True, in_flight=1
    )
    assert status.done == 3
    assert status.pending == 1
    assert status.progress == pytest.approx(0.6)


def test_empty_dataset_has_zero_progress() -> None:
    status = summarize_rows([])

    assert status.total == 0
    assert status.progress == 0.0
    assert not status.is_processing


def test_status_rejects_counters_beyond_total() -> None:
    with pytest.raises(StatusInvariantError):
        EnrichmentStatus(total=2, completed=2, failed=1)


def test_status_rejects_negative_counters() -> None:
    with pytest.raises(StatusInvariantError):
        EnrichmentStatus(total=2, completed=-1)


def test_tracker_matches_row_projection() -> None:
    rows = _rows(RowStatus.PENDING, RowStatus.PENDING)
    tracker = StatusTracker()
    tracker.begin(len(rows))

    rows[0].status = RowStatus.PROCESSING
    tracker.row_started()
    rows[0].status = RowStatus.COMPLETED
    tracker.row_completed()
    tracker.finish()

    assert tracker.verify(rows) == EnrichmentStatus(total=2, completed=1)


def test_tracker_detects_drift() -> None:
    rows = _rows(RowStatus.FAILED)
    tracker = StatusTracker()
    tracker.begin(1)
    tracker.finish()

    with pytest.raises(StatusInvariantError):
        tracker.verify(rows)
