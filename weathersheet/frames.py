"""Conversion between weather records and polars frames."""

from dataclasses import asdict
from typing import Iterable

import polars as pl

from weathersheet.models import WeatherRecord

RECORD_SCHEMA = {
    "date": pl.Utf8,
    "time": pl.Utf8,
    "temperature": pl.Float64,
    "humidity": pl.Float64,
    "precipitation": pl.Float64,
    "logger": pl.Utf8,
    "saturation_deficit": pl.Float64,
}


def records_to_frame(records: Iterable[WeatherRecord]) -> pl.DataFrame:
    return pl.DataFrame([asdict(r) for r in records], schema=RECORD_SCHEMA)


def frame_to_records(frame: pl.DataFrame) -> list[WeatherRecord]:
    columns = frame.select(list(RECORD_SCHEMA))
    return [WeatherRecord(**row) for row in columns.iter_rows(named=True)]
