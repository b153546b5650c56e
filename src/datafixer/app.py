"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from contextlib import AbstractAsyncContextManager, AsyncExitStack
from dataclasses import dataclass
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING

from datafixer.adapters.csv_loader import load_dataset_file
from datafixer.adapters.gemini import GeminiEnrichmentProvider
from datafixer.config import get_enrichment_config
from datafixer.domain.cleaning import (
    CleaningReport,
    annotate_validation_errors,
    apply_cleaning_rules,
)
from datafixer.domain.context import PipelineContext
from datafixer.domain.enrichment import EnrichmentOrchestrator, EnrichmentRunResult
from datafixer.domain.errors import PipelineConfigurationError
from datafixer.domain.export import default_export_filename, write_export
from datafixer.domain.model import CleaningRules

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from datafixer.domain.enrichment import ProgressListener
    from datafixer.domain.ports.enrichment import EnrichmentProvider
    from datafixer.domain.status import EnrichmentStatus


log = getLogger(__name__)


@dataclass(slots=True)
class CleanFileResult:
    output_path: Path
    report: CleaningReport
    flagged_rows: int


@dataclass(slots=True)
class EnrichFileResult:
    output_path: Path
    run: EnrichmentRunResult
    flagged_rows: int


def load_context(
    input_path: Path,
    *,
    domain_column: str,
    target_columns: Sequence[str] = (),
    rules: CleaningRules | None = None,
) -> PipelineContext:
    """Load ``input_path`` into a fresh context with the given selections."""

    headers, rows = load_dataset_file(input_path)
    context = PipelineContext()
    context.load(headers, rows)
    context.select_domain_column(domain_column)
    context.set_target_columns(target_columns)
    context.set_rules(rules or CleaningRules())
    return context


def clean_dataset_file(
    input_path: Path,
    *,
    domain_column: str,
    rules: CleaningRules | None = None,
    output_path: Path | None = None,
) -> CleanFileResult:
    """Apply the cleaning rules only and export the result."""

    context = load_context(input_path, domain_column=domain_column, rules=rules)
    rows, report = apply_cleaning_rules(context.rows, domain_column, context.rules)
    context.replace_rows(rows)
    flagged = annotate_validation_errors(context.rows, context.headers, context.rules)

    destination = _resolve_output_path(input_path, output_path)
    write_export(destination, context.headers, context.rows)
    log.info(
        "Cleaned %s: rows_before=%s, rows_after=%s, duplicates=%s, urls=%s, flagged=%s -> %s",
        input_path,
        report.rows_before,
        report.rows_after,
        report.duplicates_removed,
        report.urls_rewritten,
        flagged,
        destination,
    )
    return CleanFileResult(output_path=destination, report=report, flagged_rows=flagged)


def enrich_dataset_file(
    input_path: Path,
    *,
    domain_column: str,
    target_columns: Sequence[str],
    rules: CleaningRules | None = None,
    output_path: Path | None = None,
    provider: EnrichmentProvider | None = None,
    pacing_seconds: float | None = None,
    listeners: Iterable[ProgressListener] = (),
) -> EnrichFileResult:
    """Clean, enrich and export ``input_path`` using the configured provider."""

    if not target_columns:
        raise PipelineConfigurationError("Select at least one column to enrich")
    context = load_context(
        input_path,
        domain_column=domain_column,
        target_columns=target_columns,
        rules=rules,
    )
    pacing = (
        pacing_seconds if pacing_seconds is not None else get_enrichment_config().pacing_seconds
    )
    effective_provider = provider if provider is not None else GeminiEnrichmentProvider()

    run = asyncio.run(
        run_enrichment(
            context,
            provider=effective_provider,
            pacing_seconds=pacing,
            listeners=(_log_progress, *listeners),
        )
    )
    flagged = annotate_validation_errors(context.rows, context.headers, context.rules)

    destination = _resolve_output_path(input_path, output_path)
    write_export(destination, context.headers, context.rows)
    log.info(
        "Enriched %s: total=%s, completed=%s, failed=%s, flagged=%s -> %s",
        input_path,
        run.status.total,
        run.status.completed,
        run.status.failed,
        flagged,
        destination,
    )
    return EnrichFileResult(output_path=destination, run=run, flagged_rows=flagged)


async def run_enrichment(
    context: PipelineContext,
    *,
    provider: EnrichmentProvider,
    pacing_seconds: float,
    listeners: Iterable[ProgressListener] = (),
    cancel_event: asyncio.Event | None = None,
) -> EnrichmentRunResult:
    orchestrator = EnrichmentOrchestrator(
        provider=provider,
        pacing_seconds=pacing_seconds,
        listeners=list(listeners),
    )
    async with AsyncExitStack() as stack:
        if isinstance(provider, AbstractAsyncContextManager):
            await stack.enter_async_context(provider)
        return await orchestrator.run(context, cancel_event=cancel_event)


def _log_progress(status: EnrichmentStatus) -> None:
    if status.in_flight:
        return
    log.info(
        "Progress: %s/%s done (completed=%s, failed=%s)",
        status.done,
        status.total,
        status.completed,
        status.failed,
    )


def _resolve_output_path(input_path: Path, output_path: Path | None) -> Path:
    if output_path is not None:
        return output_path
    return input_path.parent / default_export_filename()
