import io
from datetime import datetime, time

import pytest
from openpyxl import Workbook

from weathersheet.config import get_settings
from weathersheet.models import WeatherRecord

HEADERS = [
    "Date",
    "Time",
    "Temperature",
    "Humidity",
    "Precipitation",
    "Logger",
    "Saturation Deficit",
]


def build_workbook(rows, headers=HEADERS) -> bytes:
    wb = Workbook()
    ws = wb.active
    if headers is not None:
        ws.append(headers)
    for row in rows:
        ws.append(row)
    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def make_workbook():
    """Factory for in-memory xlsx bytes. Rows use sheet column order:
    Date, Time, Temperature, Humidity, Logger, Precipitation, Saturation Deficit.
    """
    return build_workbook


@pytest.fixture
def make_record():
    def _make_record(
        date="2024-01-01",
        time="13:00:00",
        temperature=0.0,
        humidity=0.0,
        precipitation=0.0,
        logger="L1",
        saturation_deficit=0.0,
    ) -> WeatherRecord:
        return WeatherRecord(
            date=date,
            time=time,
            temperature=temperature,
            humidity=humidity,
            precipitation=precipitation,
            logger=logger,
            saturation_deficit=saturation_deficit,
        )

    return _make_record


@pytest.fixture
def scenario_records(make_record):
    """Two observations on 2024-01-01, one hour apart."""
    return [
        make_record(
            time="13:00:00",
            temperature=10.0,
            humidity=40.0,
            precipitation=0.5,
            saturation_deficit=1.0,
        ),
        make_record(
            time="14:00:00",
            temperature=20.0,
            humidity=60.0,
            precipitation=1.5,
            saturation_deficit=3.0,
        ),
    ]


@pytest.fixture
def scenario_workbook(make_workbook):
    return make_workbook(
        [
            [datetime(2024, 1, 1), time(13, 0), 10.0, 40.0, "L1", 0.5, 1.0],
            [datetime(2024, 1, 1), time(14, 0), 20.0, 60.0, "L1", 1.5, 3.0],
            [datetime(2024, 1, 2), time(9, 0), 5.0, 80.0, "L2", 0.0, 0.5],
        ]
    )


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Settings are cached; make every test read the environment afresh."""
    for name in ("WEATHERSHEET_MAX_UPLOAD_BYTES", "WEATHERSHEET_CSV_DECIMALS"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
