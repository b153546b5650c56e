"""Phase-based composition of the cleaning rules."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from datafixer.domain.model import CleaningRules, Row


@dataclass(slots=True)
class CleaningReport:
    rows_before: int = 0
    rows_after: int = 0
    duplicates_removed: int = 0
    urls_rewritten: int = 0
    phases: list[str] = field(default_factory=list[str])


class CleaningPhase(Protocol):
    """Contract implemented by each cleaning phase."""

    name: str

    def run(self, rows: list[Row], *, domain_column: str, report: CleaningReport) -> list[Row]: ...


@dataclass(slots=True)
class CleaningPipeline:
    """Compose and execute the ordered cleaning phases.

    Phases never mutate the input rows; each returns a new sequence, so running
    the pipeline twice over clean data yields the same rows.
    """

    phases: Sequence[CleaningPhase] = field(default_factory=tuple)

    def with_phase(self, phase: CleaningPhase) -> CleaningPipeline:
        """Return a new pipeline appending ``phase`` at the end."""

        return CleaningPipeline(phases=(*self.phases, phase))

    def extend(self, phases: Iterable[CleaningPhase]) -> CleaningPipeline:
        """Return a new pipeline with the provided ``phases`` concatenated."""

        return CleaningPipeline(phases=(*self.phases, *tuple(phases)))

    def run(self, rows: Sequence[Row], *, domain_column: str) -> tuple[list[Row], CleaningReport]:
        report = CleaningReport(rows_before=len(rows))
        current = list(rows)
        for phase in self.phases:
            current = phase.run(current, domain_column=domain_column, report=report)
            report.phases.append(phase.name)
        report.rows_after = len(current)
        return current, report


def build_cleaning_pipeline(rules: CleaningRules) -> CleaningPipeline:
    """Deduplicate first, then standardize domains, according to ``rules``."""

    from datafixer.domain.cleaning.deduplication import DeduplicationPhase
    from datafixer.domain.cleaning.urls import UrlStandardizationPhase

    pipeline = CleaningPipeline()
    if rules.remove_duplicates:
        pipeline = pipeline.with_phase(DeduplicationPhase())
    if rules.standardize_urls:
        pipeline = pipeline.with_phase(UrlStandardizationPhase())
    return pipeline


def apply_cleaning_rules(
    rows: Sequence[Row], domain_column: str, rules: CleaningRules
) -> tuple[list[Row], CleaningReport]:
    return build_cleaning_pipeline(rules).run(rows, domain_column=domain_column)
