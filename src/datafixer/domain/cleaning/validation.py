"""Shape checks for email and phone values.

These checks never rewrite data. They back the validation directives sent to
the enrichment provider and the per-row warnings shown to the user.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from datafixer.domain.model import CleaningRules, Row

EMAIL_PATTERN: Final = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_PATTERN: Final = re.compile(r"^\+?[\d\s\-()]{7,}$")
PHONE_MIN_DIGITS: Final = 10
PHONE_MAX_DIGITS: Final = 15

EMAIL_HINTS: Final = ("email",)
PHONE_HINTS: Final = ("phone", "mobile")


def is_valid_email(value: str) -> bool:
    return EMAIL_PATTERN.match(value) is not None


def is_valid_phone(value: str) -> bool:
    if PHONE_PATTERN.match(value) is None:
        return False
    digits = sum(1 for char in value if char.isdigit())
    return PHONE_MIN_DIGITS <= digits <= PHONE_MAX_DIGITS


def is_email_column(header: str) -> bool:
    lowered = header.lower()
    return any(hint in lowered for hint in EMAIL_HINTS)


def is_phone_column(header: str) -> bool:
    lowered = header.lower()
    return any(hint in lowered for hint in PHONE_HINTS)


def validate_row(row: Row, headers: Iterable[str], rules: CleaningRules) -> list[str]:
    """Return one message per malformed value; blank values are never errors."""

    errors: list[str] = []
    for header in headers:
        value = row.get(header)
        if not value.strip():
            continue
        if rules.validate_emails and is_email_column(header) and not is_valid_email(value):
            errors.append(f"{header}: malformed email {value!r}")
        if rules.validate_phones and is_phone_column(header) and not is_valid_phone(value):
            errors.append(f"{header}: malformed phone {value!r}")
    return errors


def annotate_validation_errors(
    rows: Sequence[Row], headers: Sequence[str], rules: CleaningRules
) -> int:
    """Store validation messages on each row and return how many rows have any."""

    flagged = 0
    for row in rows:
        row.validation_errors = validate_row(row, headers, rules)
        if row.validation_errors:
            flagged += 1
    return flagged
