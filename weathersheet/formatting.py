from dataclasses import asdict
from typing import Any, Sequence

import polars as pl

from weathersheet.models import AggregateRow

# External field name -> AggregateRow attribute, in output order
RESULT_FIELDS = {
    "date": "date",
    "avgTemperature": "avg_temperature",
    "avgHumidity": "avg_humidity",
    "avgSaturationDeficit": "avg_saturation_deficit",
    "minTemperature": "min_temperature",
    "maxTemperature": "max_temperature",
    "minHumidity": "min_humidity",
    "maxHumidity": "max_humidity",
    "minSaturationDeficit": "min_saturation_deficit",
    "maxSaturationDeficit": "max_saturation_deficit",
    "cumulativePrecipitation": "cumulative_precipitation",
    "startTime": "start_time",
    "endTime": "end_time",
}

RESULT_SCHEMA = {
    name: pl.Utf8 if name in ("date", "startTime", "endTime") else pl.Float64
    for name in RESULT_FIELDS
}

# Column labels of the exported spreadsheet
CSV_LABELS = {
    "date": "Date",
    "avgTemperature": "AVG Temp",
    "avgHumidity": "AVG Hum",
    "avgSaturationDeficit": "AVG Sat. Def.",
    "minTemperature": "Min Temp.",
    "maxTemperature": "Max Temp.",
    "minHumidity": "Min Hum.",
    "maxHumidity": "Max Hum.",
    "minSaturationDeficit": "Min Sat. Def",
    "maxSaturationDeficit": "Max Sat. Def.",
    "cumulativePrecipitation": "Precip.",
    "startTime": "Start Time",
    "endTime": "End Time",
}


def to_result_table(rows: Sequence[AggregateRow]) -> list[dict[str, Any]]:
    """Aggregate rows as plain dicts using the external field names."""
    table = []
    for row in rows:
        values = asdict(row)
        table.append({name: values[attr] for name, attr in RESULT_FIELDS.items()})
    return table


def to_frame(rows: Sequence[AggregateRow]) -> pl.DataFrame:
    return pl.DataFrame(to_result_table(rows), schema=RESULT_SCHEMA)


def to_csv(rows: Sequence[AggregateRow], decimals: int = 4) -> str:
    """
    Render the result table as comma-separated text with a label header row,
    numbers fixed to ``decimals`` places.
    """
    return to_frame(rows).rename(CSV_LABELS).write_csv(float_precision=decimals)


def preview(
    rows: Sequence[AggregateRow], limit: int
) -> tuple[list[AggregateRow], bool]:
    """First ``limit`` rows, and whether anything was left out."""
    return list(rows[:limit]), len(rows) > limit
