"""
Loading weather workbooks from disk, one file or a whole folder at a time.

Used by the runner scripts and notebooks; the core pipeline works on bytes
and record lists and does not import this module.
"""

import os

import polars as pl

from weathersheet.frames import RECORD_SCHEMA, frame_to_records, records_to_frame
from weathersheet.models import WeatherRecord
from weathersheet.reader import read_weather_sheet

EXCEL_EXTENSIONS = (".xlsx", ".xls")


def excel_file_to_records(file_path: str) -> list[WeatherRecord]:
    """Reads the first sheet of an Excel file on disk into weather records."""
    with open(file_path, "rb") as f:
        return read_weather_sheet(f.read())


def all_excels_to_weather_df(folder_path: str) -> pl.DataFrame:
    """
    Reads every Excel file in a folder and combines their records into a
    single DataFrame with the record columns plus 'file'.
    Files are read in name order.
    """
    all_data = []
    for fname in sorted(os.listdir(folder_path)):
        if fname.lower().endswith(EXCEL_EXTENSIONS):
            records = excel_file_to_records(os.path.join(folder_path, fname))
            df = records_to_frame(records).with_columns(pl.lit(fname).alias("file"))
            all_data.append(df)
    if all_data:
        return pl.concat(all_data)
    else:
        return pl.DataFrame(schema={**RECORD_SCHEMA, "file": pl.Utf8})


def load_weather_records(path: str) -> list[WeatherRecord]:
    """Records from a single workbook, or from every workbook in a folder."""
    if os.path.isdir(path):
        return frame_to_records(all_excels_to_weather_df(path))
    return excel_file_to_records(path)
