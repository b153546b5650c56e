"""Dataset loader turning delimited text into headers and pending rows."""

from __future__ import annotations

import io
from logging import getLogger
from typing import TYPE_CHECKING

import pandas as pd

from datafixer.domain.model import Row

if TYPE_CHECKING:
    from pathlib import Path

log = getLogger(__name__)

DEFAULT_DELIMITER = ","


class DatasetLoadError(ValueError):
    """Raised when the input is empty or cannot be parsed as delimited text."""


def parse_dataset(text: str, *, delimiter: str = DEFAULT_DELIMITER) -> tuple[list[str], list[Row]]:
    """Split ``text`` into a header list and one pending ``Row`` per data line.

    Blank lines are ignored, the first remaining line holds the headers, values
    are trimmed and unquoted, and short lines are padded with empty strings.
    """

    lines = [line for line in text.splitlines() if line.strip()]
    if not lines:
        raise DatasetLoadError("Dataset is empty")

    try:
        frame = pd.read_csv(
            io.StringIO("\n".join(lines)),
            sep=delimiter,
            header=0,
            index_col=False,
            dtype=str,
            keep_default_na=False,
            skipinitialspace=True,
        )
    except (pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
        raise DatasetLoadError(f"Could not parse dataset: {exc}") from exc

    headers = [str(column).strip() for column in frame.columns]
    frame.columns = headers
    records = frame.fillna("").astype(str).to_dict(orient="records")
    rows = [
        Row.from_mapping({str(key): value.strip() for key, value in record.items()}, headers)
        for record in records
    ]
    log.debug("Loaded dataset: columns=%s, rows=%s", len(headers), len(rows))
    return headers, rows


def load_dataset_file(
    path: Path, *, delimiter: str = DEFAULT_DELIMITER
) -> tuple[list[str], list[Row]]:
    try:
        text = path.read_text(encoding="utf-8-sig")
    except OSError as exc:
        raise DatasetLoadError(f"Could not read {path}: {exc}") from exc
    return parse_dataset(text, delimiter=delimiter)
