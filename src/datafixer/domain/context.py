"""Explicitly owned state of one cleaning/enrichment session."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from datafixer.domain.errors import PipelineConfigurationError, PipelineStateError
from datafixer.domain.model import CleaningRules, Dataset, Row
from datafixer.domain.status import EnrichmentStatus, summarize_rows

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from datafixer.domain.model import RuleName


@dataclass(slots=True)
class PipelineContext:
    """Dataset, rules and run flags shared by the orchestrator and its readers.

    Only the orchestrator writes rows while ``is_processing`` is set; readers
    must treat the rows as read-only snapshots.
    """

    dataset: Dataset = field(default_factory=Dataset)
    rules: CleaningRules = field(default_factory=CleaningRules)
    is_processing: bool = False
    is_finished: bool = False

    @property
    def headers(self) -> tuple[str, ...]:
        return self.dataset.headers

    @property
    def rows(self) -> list[Row]:
        return self.dataset.rows

    @property
    def domain_column(self) -> str | None:
        return self.dataset.domain_column

    @property
    def target_columns(self) -> list[str]:
        return self.dataset.target_columns

    def status(self) -> EnrichmentStatus:
        return summarize_rows(self.dataset.rows, is_processing=self.is_processing)

    def load(self, headers: Sequence[str], rows: Iterable[Mapping[str, str] | Row]) -> None:
        """Replace any prior dataset entirely; every row starts pending."""

        self._ensure_idle()
        header_tuple = tuple(headers)
        self.dataset = Dataset(
            headers=header_tuple,
            rows=[
                Row.from_mapping(row.values if isinstance(row, Row) else row, header_tuple)
                for row in rows
            ],
        )
        self.is_finished = False

    def reset(self) -> None:
        """Restore the initial empty state, including default rules."""

        self._ensure_idle()
        self.dataset = Dataset()
        self.rules = CleaningRules()
        self.is_processing = False
        self.is_finished = False

    def select_domain_column(self, column: str | None) -> None:
        self._ensure_idle()
        if column is not None and not self.dataset.has_column(column):
            raise PipelineConfigurationError(f"Unknown domain column: {column}")
        self.dataset.domain_column = column

    def toggle_target_column(self, column: str) -> None:
        self._ensure_idle()
        if not self.dataset.has_column(column):
            raise PipelineConfigurationError(f"Unknown target column: {column}")
        if column in self.dataset.target_columns:
            self.dataset.target_columns.remove(column)
        else:
            self.dataset.target_columns.append(column)

    def set_target_columns(self, columns: Iterable[str]) -> None:
        self._ensure_idle()
        selected: list[str] = []
        for column in columns:
            if not self.dataset.has_column(column):
                raise PipelineConfigurationError(f"Unknown target column: {column}")
            if column not in selected:
                selected.append(column)
        self.dataset.target_columns = selected

    def toggle_rule(self, rule: RuleName) -> None:
        self._ensure_idle()
        self.rules = self.rules.toggled(rule)

    def set_rules(self, rules: CleaningRules) -> None:
        self._ensure_idle()
        self.rules = rules

    def replace_rows(self, rows: list[Row]) -> None:
        self.dataset.rows = rows

    def _ensure_idle(self) -> None:
        if self.is_processing:
            raise PipelineStateError("Cannot change the pipeline while a run is in progress")
