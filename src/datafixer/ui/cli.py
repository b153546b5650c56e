from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from datafixer.adapters.csv_loader import DatasetLoadError
from datafixer.app import clean_dataset_file, enrich_dataset_file
from datafixer.config import ConfigurationError, configure_logging
from datafixer.domain.errors import PipelineConfigurationError
from datafixer.domain.model import CleaningRules

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _add_rule_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--keep-duplicates",
        action="store_true",
        help="Do not drop rows that repeat an earlier domain",
    )
    parser.add_argument(
        "--keep-urls",
        action="store_true",
        help="Do not rewrite bare domains to https:// URLs",
    )
    parser.add_argument(
        "--no-email-validation",
        action="store_true",
        help="Do not check or ask the provider to fix email formats",
    )
    parser.add_argument(
        "--no-phone-validation",
        action="store_true",
        help="Do not check or ask the provider to fix phone formats",
    )


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Clean and enrich tabular company data")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    enrich = subparsers.add_parser("enrich", help="Clean a CSV file and fill missing columns")
    enrich.add_argument("file", type=Path, help="Path to the input CSV file")
    enrich.add_argument(
        "--domain-column",
        required=True,
        help="Column holding the company domain used as lookup key",
    )
    enrich.add_argument(
        "--column",
        dest="columns",
        action="append",
        required=True,
        help="Column the provider may fill (repeatable)",
    )
    enrich.add_argument(
        "--output",
        type=Path,
        help="Where to write the result (defaults to datafixer_cleaned_<ms>.csv)",
    )
    enrich.add_argument(
        "--pacing-seconds",
        type=float,
        help="Pause between rows (defaults to DATAFIXER_PACING_SECONDS or 0.3)",
    )
    _add_rule_flags(enrich)

    clean = subparsers.add_parser("clean", help="Apply the cleaning rules without enrichment")
    clean.add_argument("file", type=Path, help="Path to the input CSV file")
    clean.add_argument(
        "--domain-column",
        required=True,
        help="Column holding the company domain",
    )
    clean.add_argument(
        "--output",
        type=Path,
        help="Where to write the result (defaults to datafixer_cleaned_<ms>.csv)",
    )
    _add_rule_flags(clean)

    return parser.parse_args(list(argv))


def _rules_from_args(args: argparse.Namespace) -> CleaningRules:
    return CleaningRules(
        remove_duplicates=not args.keep_duplicates,
        validate_emails=not args.no_email_validation,
        validate_phones=not args.no_phone_validation,
        standardize_urls=not args.keep_urls,
    )


def _validate_args(args: argparse.Namespace) -> None:
    if not args.file.exists():
        raise ValueError(f"File not found: {args.file}")
    if getattr(args, "pacing_seconds", None) is not None and args.pacing_seconds < 0:
        raise ValueError("Pacing seconds must be non-negative")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)
    try:
        _validate_args(parsed_args)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    rules = _rules_from_args(parsed_args)
    try:
        if parsed_args.command == "enrich":
            result = enrich_dataset_file(
                parsed_args.file,
                domain_column=parsed_args.domain_column,
                target_columns=parsed_args.columns,
                rules=rules,
                output_path=parsed_args.output,
                pacing_seconds=parsed_args.pacing_seconds,
            )
            log.info(
                "Enrichment finished: completed=%s, failed=%s, output=%s",
                result.run.status.completed,
                result.run.status.failed,
                result.output_path,
            )
        elif parsed_args.command == "clean":
            cleaned = clean_dataset_file(
                parsed_args.file,
                domain_column=parsed_args.domain_column,
                rules=rules,
                output_path=parsed_args.output,
            )
            log.info(
                "Cleaning finished: rows=%s, output=%s",
                cleaned.report.rows_after,
                cleaned.output_path,
            )
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except (ConfigurationError, PipelineConfigurationError, DatasetLoadError):
        log.exception("Invalid input or configuration")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error during run")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
