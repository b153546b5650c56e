from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Literal, TypeAlias

RuleName: TypeAlias = Literal[
    "remove_duplicates",
    "validate_emails",
    "validate_phones",
    "standardize_urls",
]


@dataclass(frozen=True, slots=True)
class CleaningRules:
    """Independent cleaning toggles, read-only once a run has started."""

    remove_duplicates: bool = True
    validate_emails: bool = True
    validate_phones: bool = True
    standardize_urls: bool = True

    def toggled(self, rule: RuleName) -> CleaningRules:
        """Return a copy with ``rule`` flipped."""

        if rule not in {f.name for f in fields(self)}:
            raise ValueError(f"Unknown cleaning rule: {rule}")
        return replace(self, **{rule: not getattr(self, rule)})
