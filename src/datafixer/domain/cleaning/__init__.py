"""Cleaning rules applied to a dataset before enrichment.

Each rule is a pure function over the row sequence and the domain column, and
is also wrapped as a ``CleaningPhase`` so ``CleaningPipeline`` can run them in a
fixed order: deduplication first, then URL standardization.
"""

from __future__ import annotations

from .deduplication import DeduplicationPhase, deduplicate_rows
from .pipeline import (
    CleaningPhase,
    CleaningPipeline,
    CleaningReport,
    apply_cleaning_rules,
    build_cleaning_pipeline,
)
from .urls import UrlStandardizationPhase, standardize_url, standardize_urls
from .validation import (
    annotate_validation_errors,
    is_valid_email,
    is_valid_phone,
    validate_row,
)

__all__ = [
    "CleaningPhase",
    "CleaningPipeline",
    "CleaningReport",
    "DeduplicationPhase",
    "UrlStandardizationPhase",
    "annotate_validation_errors",
    "apply_cleaning_rules",
    "build_cleaning_pipeline",
    "deduplicate_rows",
    "is_valid_email",
    "is_valid_phone",
    "standardize_url",
    "standardize_urls",
    "validate_row",
]
