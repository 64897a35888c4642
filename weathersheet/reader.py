"""
Read weather logger workbooks into `WeatherRecord` lists.

Only the first worksheet is used. Its first row holds the headers, every
following row one observation, with columns in this fixed order:

    Date | Time | Temperature | Humidity | Logger | Precipitation | Saturation Deficit

Header names are not checked, only that there are enough of them.
"""

import io
import math
from datetime import date, datetime, time, timedelta, timezone
from enum import Enum

import numpy as np
import pandas as pd
import structlog

from weathersheet.errors import ParseError
from weathersheet.models import WeatherRecord

logger = structlog.get_logger(__name__)

EXPECTED_HEADERS = [
    "Date",
    "Time",
    "Temperature",
    "Humidity",
    "Precipitation",
    "Logger",
    "Saturation Deficit",
]

# Zero-based column positions within a row
DATE_COLUMN = 0
TIME_COLUMN = 1
TEMPERATURE_COLUMN = 2
HUMIDITY_COLUMN = 3
LOGGER_COLUMN = 4
PRECIPITATION_COLUMN = 5
SATURATION_DEFICIT_COLUMN = 6


class CellKind(Enum):
    EMPTY = "empty"
    BOOLEAN = "boolean"
    NUMBER = "number"
    DATETIME = "datetime"
    DATE = "date"
    TIME = "time"
    DURATION = "duration"
    TEXT = "text"


def cell_kind(value) -> CellKind:
    """Classify a raw cell value as loaded by the excel engine."""
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return CellKind.EMPTY
    if isinstance(value, (bool, np.bool_)):
        return CellKind.BOOLEAN
    if isinstance(value, (int, float, np.integer, np.floating)):
        return CellKind.NUMBER
    # datetime is a subclass of date, so it goes first
    if isinstance(value, datetime):
        return CellKind.DATETIME
    if isinstance(value, date):
        return CellKind.DATE
    if isinstance(value, time):
        return CellKind.TIME
    if isinstance(value, (timedelta, pd.Timedelta)):
        return CellKind.DURATION
    if isinstance(value, str) and not value.strip():
        return CellKind.EMPTY
    return CellKind.TEXT


def _to_utc(value: datetime) -> datetime:
    # Excel stores wall-clock values without an offset; read those as UTC
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc)


def _time_to_utc(value: time) -> time:
    if value.tzinfo is None:
        return value
    # Any fixed day works, only the offset matters
    return _to_utc(datetime.combine(date(2000, 1, 1), value)).time()


def parse_date_cell(value, row_number: int) -> str:
    """Return the cell's calendar date as ``YYYY-MM-DD``."""
    kind = cell_kind(value)
    if kind == CellKind.DATETIME:
        return _to_utc(value).strftime("%Y-%m-%d")
    if kind == CellKind.DATE:
        return value.isoformat()
    if kind == CellKind.TEXT:
        try:
            return _to_utc(datetime.fromisoformat(str(value).strip())).strftime(
                "%Y-%m-%d"
            )
        except ValueError:
            pass
    raise ParseError(f"Invalid date in row {row_number}: {value!r}")


def parse_time_cell(value, row_number: int) -> str:
    """Return the cell's time of day as ``HH:MM:SS``."""
    kind = cell_kind(value)
    if kind == CellKind.DATETIME:
        return _to_utc(value).strftime("%H:%M:%S")
    if kind == CellKind.TIME:
        return _time_to_utc(value).strftime("%H:%M:%S")
    if kind == CellKind.DURATION:
        seconds = int(pd.Timedelta(value).total_seconds()) % (24 * 60 * 60)
        return f"{seconds // 3600:02d}:{seconds % 3600 // 60:02d}:{seconds % 60:02d}"
    if kind == CellKind.TEXT:
        try:
            parsed = time.fromisoformat(str(value).strip())
            return _time_to_utc(parsed).strftime("%H:%M:%S")
        except ValueError:
            pass
    raise ParseError(f"Invalid time in row {row_number}: {value!r}")


def parse_number_cell(value) -> float:
    """Numeric cells as float, anything else (text, blanks, booleans) as 0."""
    if cell_kind(value) != CellKind.NUMBER:
        return 0.0
    number = float(value)
    return number if math.isfinite(number) else 0.0


def parse_text_cell(value) -> str:
    kind = cell_kind(value)
    if kind == CellKind.EMPTY:
        return ""
    if kind == CellKind.NUMBER and float(value).is_integer():
        return str(int(value))
    return str(value).strip()


def check_headers(header_row: list) -> None:
    headers = [cell for cell in header_row if cell_kind(cell) != CellKind.EMPTY]
    if not headers:
        raise ParseError("No headers found in the file")
    if len(headers) < len(EXPECTED_HEADERS):
        raise ParseError(
            f"Missing headers in the file. Expected: {', '.join(EXPECTED_HEADERS)}"
        )


def sheet_to_records(df: pd.DataFrame) -> list[WeatherRecord]:
    """
    Transforms a raw sheet DataFrame (read with ``header=None``) into weather
    records. The first row is the header row. Fully blank rows are skipped.
    """
    if df.empty:
        raise ParseError("No headers found in the file")
    rows = df.to_numpy(dtype=object).tolist()
    check_headers(rows[0])

    records = []
    for offset, row in enumerate(rows[1:]):
        row_number = offset + 2
        if all(cell_kind(cell) == CellKind.EMPTY for cell in row):
            continue
        records.append(
            WeatherRecord(
                date=parse_date_cell(row[DATE_COLUMN], row_number),
                time=parse_time_cell(row[TIME_COLUMN], row_number),
                temperature=parse_number_cell(row[TEMPERATURE_COLUMN]),
                humidity=parse_number_cell(row[HUMIDITY_COLUMN]),
                logger=parse_text_cell(row[LOGGER_COLUMN]),
                precipitation=parse_number_cell(row[PRECIPITATION_COLUMN]),
                saturation_deficit=parse_number_cell(row[SATURATION_DEFICIT_COLUMN]),
            )
        )
    return records


def read_weather_sheet(content: bytes) -> list[WeatherRecord]:
    """
    Reads the first sheet of an Excel workbook (xlsx or xls bytes) into
    weather records, in sheet row order.
    """
    with pd.ExcelFile(io.BytesIO(content)) as xl:
        if not xl.sheet_names:
            raise ParseError("No worksheet found in the file")
        sheet_name = xl.sheet_names[0]
        # Raw cell objects; no NA-string guessing so text cells stay text
        df = xl.parse(
            sheet_name, header=None, dtype=object, keep_default_na=False
        )

    records = sheet_to_records(df)
    logger.debug("Read weather sheet", sheet=sheet_name, records=len(records))
    return records
