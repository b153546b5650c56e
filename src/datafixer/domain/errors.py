"""Error types raised by the cleaning and enrichment pipeline."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datafixer.domain.model import RowStatus


class PipelineError(RuntimeError):
    """Base class for pipeline errors."""


class InvalidTransitionError(PipelineError):
    """Raised when a row is moved along an edge the lifecycle does not allow."""

    def __init__(self, current: RowStatus, target: RowStatus) -> None:
        super().__init__(f"Row cannot move from {current} to {target}")
        self.current = current
        self.target = target


class PipelineStateError(PipelineError):
    """Raised when the pipeline context is used out of order."""


class PipelineConfigurationError(PipelineError):
    """Raised when a run is started without a usable domain or target column."""


class StatusInvariantError(PipelineError):
    """Raised when aggregate counters contradict the row states."""
