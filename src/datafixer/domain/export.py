"""Serialize a dataset back into quoted delimiter-separated text."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from pathlib import Path

    from datafixer.domain.model import Row

DEFAULT_DELIMITER = ","
QUOTE = '"'
EXPORT_PREFIX = "datafixer_cleaned_"


def quote_field(value: str) -> str:
    return QUOTE + value.replace(QUOTE, QUOTE * 2) + QUOTE


def serialize_rows(
    headers: Sequence[str],
    rows: Iterable[Row],
    *,
    delimiter: str = DEFAULT_DELIMITER,
) -> str:
    """Render the header line, then one quoted line per row in header order.

    Only data columns are written; row status, sources and validation messages
    never reach the output.
    """

    lines = [delimiter.join(headers)]
    lines.extend(
        delimiter.join(quote_field(row.get(header)) for header in headers) for row in rows
    )
    return "".join(f"{line}\n" for line in lines)


def write_export(
    path: Path,
    headers: Sequence[str],
    rows: Iterable[Row],
    *,
    delimiter: str = DEFAULT_DELIMITER,
) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(serialize_rows(headers, rows, delimiter=delimiter), encoding="utf-8")
    return path


def default_export_filename(now: datetime | None = None) -> str:
    moment = now or datetime.now(UTC)
    return f"{EXPORT_PREFIX}{int(moment.timestamp() * 1000)}.csv"
