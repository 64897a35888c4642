"""Summarise a weather logger workbook into a CSV table.

Usage:
    python scripts/summarize_weather.py data/raw/logger.xlsx \
        --start-time 08:00 --end-time 18:59 --per-date

The input can be a single workbook or a folder of workbooks. Without
--start-date/--end-date every date is used.
"""

import argparse
import sys
from datetime import date
from pathlib import Path

import structlog

from weathersheet.config import get_settings
from weathersheet.errors import ParseError
from weathersheet.formatting import preview, to_csv, to_result_table
from weathersheet.log import setup_logging
from weathersheet.models import FilterCriteria
from weathersheet.pipeline import run_pipeline
from weathersheet.utils import load_weather_records
from weathersheet.validation import INVALID_TIME_MESSAGE, is_valid_time

logger = structlog.get_logger(__name__)


def time_of_day(value: str) -> str:
    if not is_valid_time(value):
        raise argparse.ArgumentTypeError(f"{INVALID_TIME_MESSAGE}: {value!r}")
    return value


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Summarise weather logger observations within a time window."
    )
    parser.add_argument("input", type=Path, help="Workbook (.xlsx/.xls) or folder")
    parser.add_argument("--start-date", type=date.fromisoformat, default=None)
    parser.add_argument("--end-date", type=date.fromisoformat, default=None)
    parser.add_argument("--start-time", type=time_of_day, default="00:00")
    parser.add_argument("--end-time", type=time_of_day, default="23:59")
    parser.add_argument(
        "--per-date",
        action="store_true",
        help="One row per date instead of a single row for all records",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("data/clean/weather_summary.csv"),
        help="CSV output path (default: data/clean/weather_summary.csv)",
    )
    args = parser.parse_args(argv)
    if (args.start_date is None) != (args.end_date is None):
        parser.error("--start-date and --end-date must be given together")
    if args.start_date is not None and args.end_date < args.start_date:
        parser.error("--end-date must not be before --start-date")
    return args


def main(argv=None) -> int:
    args = parse_args(argv)
    settings = get_settings()
    setup_logging()

    criteria = FilterCriteria(
        start_time=args.start_time,
        end_time=args.end_time,
        start_date=args.start_date,
        end_date=args.end_date,
        group_by_date=args.per_date,
    )

    try:
        records = load_weather_records(str(args.input))
    except ParseError as e:
        print(f"Could not read {args.input}: {e}", file=sys.stderr)
        return 1
    except Exception:
        logger.exception("Failed to read weather workbook", path=str(args.input))
        print(f"Could not read {args.input}", file=sys.stderr)
        return 1

    rows = run_pipeline(records, criteria)
    if not rows:
        print("No data to display. Try a different file or change the parameters.")
        return 0

    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(to_csv(rows, decimals=settings.csv_decimals))

    shown, truncated = preview(rows, settings.preview_rows)
    for row in to_result_table(shown):
        print(row)
    if truncated:
        print(f"... showing first {len(shown)} of {len(rows)} rows")
    print(f"Saved {len(rows)} rows to {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
