"""
Data models for weather logger records and their summaries.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class WeatherRecord:
    """A single row of a weather logger sheet."""

    date: str  # YYYY-MM-DD, UTC
    time: str  # HH:MM:SS, UTC
    temperature: float
    humidity: float
    precipitation: float
    logger: str
    saturation_deficit: float


@dataclass(frozen=True)
class FilterCriteria:
    """Which records to keep and how to group them."""

    start_time: str  # HH:MM
    end_time: str  # HH:MM
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    group_by_date: bool = False

    @property
    def has_date_range(self) -> bool:
        return self.start_date is not None and self.end_date is not None


@dataclass(frozen=True)
class AggregateRow:
    """Summary statistics for one group of records."""

    date: str
    avg_temperature: float
    avg_humidity: float
    avg_saturation_deficit: float
    min_temperature: float
    max_temperature: float
    min_humidity: float
    max_humidity: float
    min_saturation_deficit: float
    max_saturation_deficit: float
    cumulative_precipitation: float
    start_time: str  # HH:MM
    end_time: str  # HH:MM


@dataclass(frozen=True)
class MonthlyAverage:
    """Average temperature and humidity for one calendar month."""

    year: str
    month: str
    average_temperature: float
    average_humidity: float
