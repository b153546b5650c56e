"""Sequential enrichment of a cleaned dataset through a provider port."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from datafixer.domain import lifecycle
from datafixer.domain.cleaning import CleaningReport, apply_cleaning_rules
from datafixer.domain.errors import PipelineConfigurationError, PipelineStateError
from datafixer.domain.model import RowStatus
from datafixer.domain.ports.enrichment import EnrichmentDirectives, EnrichmentRequest
from datafixer.domain.status import EnrichmentStatus, StatusTracker

if TYPE_CHECKING:
    from datafixer.domain.context import PipelineContext
    from datafixer.domain.model import Row
    from datafixer.domain.ports.enrichment import EnrichmentProvider, EnrichmentResponse

log = getLogger(__name__)

DEFAULT_PACING_SECONDS = 0.3

ProgressListener = Callable[[EnrichmentStatus], None]
Sleep = Callable[[float], Awaitable[None]]


@dataclass(slots=True)
class RowFailure:
    index: int
    domain: str
    error: str


@dataclass(slots=True)
class EnrichmentRunResult:
    status: EnrichmentStatus
    cleaning: CleaningReport
    failures: list[RowFailure] = field(default_factory=list[RowFailure])
    provider_calls: int = 0
    cancelled: bool = False


@dataclass(slots=True)
class EnrichmentOrchestrator:
    """Walk the rows one at a time, calling the provider for each domain.

    At most one provider call is in flight. A fixed pacing delay follows every
    row, skipped rows included, so the call rate never exceeds one call per
    ``pacing_seconds``. A provider error fails only its own row.
    """

    provider: EnrichmentProvider
    pacing_seconds: float = DEFAULT_PACING_SECONDS
    sleep: Sleep = asyncio.sleep
    listeners: list[ProgressListener] = field(default_factory=list[ProgressListener])

    def add_listener(self, listener: ProgressListener) -> None:
        self.listeners.append(listener)

    async def run(
        self,
        context: PipelineContext,
        *,
        cancel_event: asyncio.Event | None = None,
    ) -> EnrichmentRunResult:
        """Clean the dataset held by ``context`` and enrich every row in order.

        Setting ``cancel_event`` stops the run before the next row; rows not yet
        reached stay pending and the context is not marked finished. A context
        holding rows that already left ``pending`` cannot be run again until it
        is reloaded or reset.
        """

        domain_column, target_columns = _require_columns(context)
        if context.is_processing:
            raise PipelineStateError("An enrichment run is already in progress")
        if context.is_finished:
            raise PipelineStateError("Dataset was already enriched; reload or reset first")
        if any(row.status is not RowStatus.PENDING for row in context.rows):
            raise PipelineStateError("Dataset was partially enriched; reload or reset first")

        context.is_processing = True
        tracker = StatusTracker()
        try:
            rows, report = apply_cleaning_rules(context.rows, domain_column, context.rules)
            context.replace_rows(rows)
            tracker.begin(len(rows))
            self._notify(tracker)

            result = EnrichmentRunResult(status=tracker.snapshot(), cleaning=report)
            directives = EnrichmentDirectives(
                validate_emails=context.rules.validate_emails,
                validate_phones=context.rules.validate_phones,
            )
            log.info(
                "Starting enrichment: rows=%s, dropped=%s, domain_column=%s, targets=%s",
                len(rows),
                report.rows_before - report.rows_after,
                domain_column,
                ", ".join(target_columns),
            )

            for index, row in enumerate(rows):
                if cancel_event is not None and cancel_event.is_set():
                    log.info("Enrichment cancelled before row %s", index)
                    result.cancelled = True
                    break
                await self._process_row(
                    index,
                    row,
                    domain_column=domain_column,
                    target_columns=target_columns,
                    headers=context.headers,
                    directives=directives,
                    tracker=tracker,
                    result=result,
                )
                await self.sleep(self.pacing_seconds)
        finally:
            context.is_processing = False
            tracker.finish()

        if not result.cancelled:
            context.is_finished = True
        result.status = tracker.verify(context.rows)
        self._notify(tracker)
        log.info(
            "Finished enrichment: total=%s, completed=%s, failed=%s, cancelled=%s",
            result.status.total,
            result.status.completed,
            result.status.failed,
            result.cancelled,
        )
        return result

    async def _process_row(
        self,
        index: int,
        row: Row,
        *,
        domain_column: str,
        target_columns: tuple[str, ...],
        headers: tuple[str, ...],
        directives: EnrichmentDirectives,
        tracker: StatusTracker,
        result: EnrichmentRunResult,
    ) -> None:
        lifecycle.start_processing(row)
        tracker.row_started()
        self._notify(tracker)

        domain = row.get(domain_column)
        if not domain.strip():
            log.debug("Row %s has no domain, skipping provider call", index)
            lifecycle.mark_completed(row)
            tracker.row_completed()
            self._notify(tracker)
            return

        request = EnrichmentRequest(
            domain=domain,
            target_columns=target_columns,
            context=row.snapshot(),
            directives=directives,
        )
        result.provider_calls += 1
        try:
            response = await self.provider.enrich(request)
        except Exception as exc:  # noqa: BLE001
            log.warning("Enrichment failed for row %s (%s): %s", index, domain, exc, exc_info=True)
            result.failures.append(RowFailure(index=index, domain=domain, error=str(exc)))
            lifecycle.mark_failed(row)
            tracker.row_failed()
        else:
            _merge_response(row, response, headers=headers)
            lifecycle.mark_completed(row)
            tracker.row_completed()
            log.debug("Row %s (%s) enriched with %s sources", index, domain, len(row.sources))
        self._notify(tracker)

    def _notify(self, tracker: StatusTracker) -> None:
        snapshot = tracker.snapshot()
        for listener in self.listeners:
            listener(snapshot)


def _require_columns(context: PipelineContext) -> tuple[str, tuple[str, ...]]:
    domain_column = context.domain_column
    if not domain_column:
        raise PipelineConfigurationError("Select a domain column before enriching")
    if domain_column not in context.headers:
        raise PipelineConfigurationError(f"Unknown domain column: {domain_column}")
    if not context.target_columns:
        raise PipelineConfigurationError("Select at least one column to enrich")
    unknown = [column for column in context.target_columns if column not in context.headers]
    if unknown:
        raise PipelineConfigurationError(f"Unknown target columns: {', '.join(unknown)}")
    return domain_column, tuple(context.target_columns)


def _merge_response(row: Row, response: EnrichmentResponse, *, headers: tuple[str, ...]) -> None:
    """Copy response values onto ``row``; keys outside the headers go to ``extras``."""

    for column, value in response.data.items():
        if column in headers:
            row.values[column] = value
        else:
            row.extras[column] = value
    row.sources = list(response.sources)
