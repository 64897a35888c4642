from datetime import date, datetime, time

import pytest

from weathersheet import pipeline
from weathersheet.errors import ParseError
from weathersheet.models import FilterCriteria
from weathersheet.pipeline import (
    GENERIC_ERROR_MESSAGE,
    process_file,
    process_workbook,
    run_pipeline,
)
from weathersheet.validation import INVALID_TIME_MESSAGE

XLSX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def test_scenario_a_single_row_for_all(scenario_records):
    criteria = FilterCriteria(start_time="13:00", end_time="15:00")
    (row,) = run_pipeline(scenario_records, criteria)

    assert row.date == "All"
    assert row.avg_temperature == 15.0
    assert row.min_temperature == 10.0
    assert row.max_temperature == 20.0
    assert row.start_time == "13:00"
    assert row.end_time == "14:00"


def test_scenario_b_grouped_by_date(scenario_records):
    ungrouped = FilterCriteria(start_time="13:00", end_time="15:00")
    grouped = FilterCriteria(
        start_time="13:00", end_time="15:00", group_by_date=True
    )

    (all_row,) = run_pipeline(scenario_records, ungrouped)
    (date_row,) = run_pipeline(scenario_records, grouped)

    assert date_row.date == "2024-01-01"
    assert date_row.avg_temperature == all_row.avg_temperature
    assert date_row.min_temperature == all_row.min_temperature
    assert date_row.max_temperature == all_row.max_temperature
    assert date_row.cumulative_precipitation == all_row.cumulative_precipitation
    assert (date_row.start_time, date_row.end_time) == ("13:00", "14:00")


@pytest.mark.parametrize("group_by_date", [False, True])
def test_scenario_c_date_range_excludes_everything(scenario_records, group_by_date):
    criteria = FilterCriteria(
        start_time="13:00",
        end_time="15:00",
        start_date=date(2024, 1, 2),
        end_date=date(2024, 1, 3),
        group_by_date=group_by_date,
    )

    assert run_pipeline(scenario_records, criteria) == []


def test_narrow_time_window_keeps_boundary_record(scenario_records):
    criteria = FilterCriteria(start_time="14:00", end_time="14:00")
    (row,) = run_pipeline(scenario_records, criteria)

    assert row.avg_temperature == 20.0
    assert row.start_time == row.end_time == "14:00"


def test_process_workbook_per_date(scenario_workbook):
    criteria = FilterCriteria(
        start_time="00:00", end_time="23:59", group_by_date=True
    )
    rows = process_workbook(scenario_workbook, criteria)

    assert {row.date for row in rows} == {"2024-01-01", "2024-01-02"}
    by_date = {row.date: row for row in rows}
    assert by_date["2024-01-01"].avg_temperature == 15.0
    assert by_date["2024-01-01"].cumulative_precipitation == 2.0
    assert by_date["2024-01-02"].avg_humidity == 80.0
    assert by_date["2024-01-02"].start_time == "09:00"


def test_process_file_with_date_range(scenario_workbook):
    result = process_file(
        file=scenario_workbook,
        content_type=XLSX_CONTENT_TYPE,
        start_time="08:00",
        end_time="18:00",
        start_date="2024-01-02",
        end_date="2024-01-02",
    )

    assert result.ok
    (row,) = result.data
    assert row.date == "2024-01-02 - 2024-01-02"
    assert row.avg_temperature == 5.0


def test_process_file_with_no_matches_is_empty_not_error(scenario_workbook):
    result = process_file(
        file=scenario_workbook,
        content_type=XLSX_CONTENT_TYPE,
        start_time="22:00",
        end_time="02:00",
    )

    assert result.data == []
    assert result.server_error is None
    assert result.validation_errors == {}


def test_scenario_d_text_temperature_is_zero(make_workbook):
    content = make_workbook(
        [[datetime(2024, 1, 1), time(12, 0), "warm", 50.0, "L1", 0.0, 1.0]]
    )
    result = process_file(
        file=content,
        content_type=XLSX_CONTENT_TYPE,
        start_time="00:00",
        end_time="23:59",
    )

    assert result.ok
    assert result.data[0].avg_temperature == 0.0


def test_scenario_e_missing_column_message_is_surfaced(make_workbook):
    headers = [
        "Date",
        "Time",
        "Temperature",
        "Humidity",
        "Logger",
        "Saturation Deficit",
    ]
    content = make_workbook([], headers=headers)

    result = process_file(
        file=content,
        content_type=XLSX_CONTENT_TYPE,
        start_time="00:00",
        end_time="23:59",
    )

    assert result.data is None
    assert result.server_error == (
        "Missing headers in the file. Expected: Date, Time, Temperature, "
        "Humidity, Precipitation, Logger, Saturation Deficit"
    )


def test_validation_stops_before_reading(monkeypatch):
    def fail(*args, **kwargs):
        raise AssertionError("workbook should not be read")

    monkeypatch.setattr(pipeline, "process_workbook", fail)

    result = process_file(
        file=b"irrelevant",
        content_type=XLSX_CONTENT_TYPE,
        start_time="7:00",
        end_time="18:00",
    )

    assert result.validation_errors == {"startTime": [INVALID_TIME_MESSAGE]}
    assert result.data is None
    assert result.server_error is None


def test_unexpected_errors_are_masked():
    result = process_file(
        file=b"definitely not a spreadsheet",
        content_type=XLSX_CONTENT_TYPE,
        start_time="00:00",
        end_time="23:59",
    )

    assert result.server_error == GENERIC_ERROR_MESSAGE


def test_parse_error_is_not_masked(monkeypatch):
    def no_worksheet(content):
        raise ParseError("No worksheet found in the file")

    monkeypatch.setattr(pipeline, "read_weather_sheet", no_worksheet)

    result = process_file(
        file=b"PK",
        content_type=XLSX_CONTENT_TYPE,
        start_time="00:00",
        end_time="23:59",
    )

    assert result.server_error == "No worksheet found in the file"
