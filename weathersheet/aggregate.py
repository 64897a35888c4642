"""
Summary statistics over groups of weather records.

A group is either every record passed in, or all records sharing a date.
Each group yields the mean, minimum and maximum of temperature, humidity and
saturation deficit, the summed precipitation, and the earliest and latest
observation time (as ``HH:MM``). Values are not rounded here.
"""

from typing import Any, Iterable

import polars as pl

from weathersheet.frames import records_to_frame
from weathersheet.models import (
    AggregateRow,
    FilterCriteria,
    MonthlyAverage,
    WeatherRecord,
)

ALL_DATES_LABEL = "All"

# (column, mean, min, max)
MEASUREMENTS = [
    ("temperature", "avg_temperature", "min_temperature", "max_temperature"),
    ("humidity", "avg_humidity", "min_humidity", "max_humidity"),
    (
        "saturation_deficit",
        "avg_saturation_deficit",
        "min_saturation_deficit",
        "max_saturation_deficit",
    ),
]


def _stat_exprs() -> list[pl.Expr]:
    exprs = []
    for column, avg_name, min_name, max_name in MEASUREMENTS:
        exprs += [
            pl.col(column).mean().alias(avg_name),
            pl.col(column).min().alias(min_name),
            pl.col(column).max().alias(max_name),
        ]
    exprs += [
        pl.col("precipitation").sum().alias("cumulative_precipitation"),
        pl.col("time").min().str.slice(0, 5).alias("start_time"),
        pl.col("time").max().str.slice(0, 5).alias("end_time"),
    ]
    return exprs


def _bound_means(stats: dict[str, Any]) -> dict[str, Any]:
    # Float summation can push the mean of near-equal values just past the max
    for _, avg_name, min_name, max_name in MEASUREMENTS:
        stats[avg_name] = min(max(stats[avg_name], stats[min_name]), stats[max_name])
    return stats


def frame_stats(frame: pl.DataFrame) -> dict[str, Any]:
    """Statistics for a single, non-empty group given as a frame."""
    if frame.is_empty():
        raise ValueError("Cannot aggregate an empty group of records")
    return _bound_means(frame.select(_stat_exprs()).row(0, named=True))


def aggregate(records: Iterable[WeatherRecord]) -> dict[str, Any]:
    """
    Statistics for one group of records, keyed by `AggregateRow` field names
    (everything but ``date``). Raises ``ValueError`` for an empty group.
    """
    return frame_stats(records_to_frame(records))


def date_range_label(criteria: FilterCriteria) -> str:
    if not criteria.has_date_range:
        return ALL_DATES_LABEL
    return f"{criteria.start_date.isoformat()} - {criteria.end_date.isoformat()}"


def aggregate_frame_by_date(frame: pl.DataFrame) -> list[AggregateRow]:
    grouped = frame.group_by("date", maintain_order=True).agg(_stat_exprs())
    return [AggregateRow(**_bound_means(row)) for row in grouped.iter_rows(named=True)]


def aggregate_by_date(records: Iterable[WeatherRecord]) -> list[AggregateRow]:
    """One row per distinct date, keyed by that date.

    Rows come out in first-seen order, which callers should not rely on.
    """
    return aggregate_frame_by_date(records_to_frame(records))


def aggregate_frame_all(
    frame: pl.DataFrame, criteria: FilterCriteria
) -> list[AggregateRow]:
    return [AggregateRow(date=date_range_label(criteria), **frame_stats(frame))]


def aggregate_all(
    records: Iterable[WeatherRecord], criteria: FilterCriteria
) -> list[AggregateRow]:
    """A single row over every record, labelled "All" or "<start> - <end>"."""
    return aggregate_frame_all(records_to_frame(records), criteria)


def monthly_rollup(records: Iterable[WeatherRecord]) -> list[MonthlyAverage]:
    """Average temperature and humidity per calendar month, oldest first."""
    monthly = (
        records_to_frame(records)
        .with_columns(
            pl.col("date").str.slice(0, 4).alias("year"),
            pl.col("date").str.slice(5, 2).alias("month"),
        )
        .group_by(["year", "month"])
        .agg(
            pl.col("temperature").mean().alias("average_temperature"),
            pl.col("humidity").mean().alias("average_humidity"),
        )
        .sort(["year", "month"])
    )
    return [MonthlyAverage(**row) for row in monthly.iter_rows(named=True)]
