"""Domain model for tabular datasets under cleaning and enrichment."""

from __future__ import annotations

from .dataset import Dataset
from .enums import RowStatus, SourceKind
from .row import Row
from .rules import CleaningRules, RuleName
from .source import SourceRecord

__all__ = [
    "CleaningRules",
    "Dataset",
    "Row",
    "RowStatus",
    "RuleName",
    "SourceKind",
    "SourceRecord",
]
