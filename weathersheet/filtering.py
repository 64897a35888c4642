from typing import Iterable

import polars as pl

from weathersheet.frames import frame_to_records, records_to_frame
from weathersheet.models import FilterCriteria, WeatherRecord


def filter_frame(frame: pl.DataFrame, criteria: FilterCriteria) -> pl.DataFrame:
    """
    Keep rows inside the date range (when one is given) and inside the
    time-of-day window. Both bounds are inclusive.

    Dates and times are fixed-width ISO strings, so string comparison is
    chronological. A window that wraps past midnight (e.g. 22:00-02:00) keeps
    nothing.
    """
    if criteria.has_date_range:
        frame = frame.filter(
            (pl.col("date") >= criteria.start_date.isoformat())
            & (pl.col("date") <= criteria.end_date.isoformat())
        )
    return frame.filter(
        (pl.col("time") >= f"{criteria.start_time}:00")
        & (pl.col("time") <= f"{criteria.end_time}:00")
    )


def filter_records(
    records: Iterable[WeatherRecord], criteria: FilterCriteria
) -> list[WeatherRecord]:
    return frame_to_records(filter_frame(records_to_frame(records), criteria))
