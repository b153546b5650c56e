"""Row lifecycle: pending -> processing -> completed | failed."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from datafixer.domain.errors import InvalidTransitionError
from datafixer.domain.model import RowStatus

if TYPE_CHECKING:
    from datafixer.domain.model import Row

ALLOWED_TRANSITIONS: Final[dict[RowStatus, frozenset[RowStatus]]] = {
    RowStatus.PENDING: frozenset({RowStatus.PROCESSING}),
    RowStatus.PROCESSING: frozenset({RowStatus.COMPLETED, RowStatus.FAILED}),
    RowStatus.COMPLETED: frozenset(),
    RowStatus.FAILED: frozenset(),
}


def can_transition(current: RowStatus, target: RowStatus) -> bool:
    return target in ALLOWED_TRANSITIONS[current]


def advance(row: Row, target: RowStatus) -> None:
    """Move ``row`` to ``target`` or raise ``InvalidTransitionError``.

    Terminal states have no outgoing edges; a row only becomes pending again by
    being rebuilt from a fresh dataset load.
    """

    if not can_transition(row.status, target):
        raise InvalidTransitionError(row.status, target)
    row.status = target


def start_processing(row: Row) -> None:
    advance(row, RowStatus.PROCESSING)


def mark_completed(row: Row) -> None:
    advance(row, RowStatus.COMPLETED)


def mark_failed(row: Row) -> None:
    advance(row, RowStatus.FAILED)
