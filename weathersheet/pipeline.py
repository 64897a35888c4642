"""
Run the read → filter → aggregate pipeline, and the request boundary around it.

`process_file` never raises: validation problems come back per field, parse
problems with their own message, and anything else as a generic message so
internals do not leak to the caller.
"""

from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

import structlog

from weathersheet.aggregate import aggregate_frame_all, aggregate_frame_by_date
from weathersheet.errors import ParseError, ValidationError
from weathersheet.filtering import filter_frame
from weathersheet.frames import records_to_frame
from weathersheet.models import AggregateRow, FilterCriteria, WeatherRecord
from weathersheet.reader import read_weather_sheet
from weathersheet.validation import validate_request

logger = structlog.get_logger(__name__)

GENERIC_ERROR_MESSAGE = "Something went wrong while executing the operation."


@dataclass
class ActionResult:
    """Outcome of one request. At most one of the three parts is set."""

    data: Optional[list[AggregateRow]] = None
    validation_errors: dict[str, list[str]] = field(default_factory=dict)
    server_error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.data is not None


def run_pipeline(
    records: Iterable[WeatherRecord], criteria: FilterCriteria
) -> list[AggregateRow]:
    frame = filter_frame(records_to_frame(records), criteria)
    if frame.is_empty():
        return []
    if criteria.group_by_date:
        return aggregate_frame_by_date(frame)
    return aggregate_frame_all(frame, criteria)


def process_workbook(content: bytes, criteria: FilterCriteria) -> list[AggregateRow]:
    records = read_weather_sheet(content)
    rows = run_pipeline(records, criteria)
    logger.info(
        "Processed weather sheet",
        records=len(records),
        rows=len(rows),
        per_date=criteria.group_by_date,
        date_range=criteria.has_date_range,
    )
    return rows


def process_file(
    file: bytes,
    content_type: str,
    start_time: str,
    end_time: str,
    start_date: Any = None,
    end_date: Any = None,
    avg_per_date: bool = False,
    filename: Optional[str] = None,
) -> ActionResult:
    try:
        request = validate_request(
            file={"content": file, "content_type": content_type, "filename": filename},
            startDate=start_date,
            endDate=end_date,
            startTime=start_time,
            endTime=end_time,
            avgPerDate=avg_per_date,
        )
    except ValidationError as e:
        logger.info("Rejected request", errors=e.errors)
        return ActionResult(validation_errors=e.errors)

    try:
        rows = process_workbook(request.file.content, request.criteria())
    except ParseError as e:
        logger.warning("Could not parse weather sheet", filename=filename, error=str(e))
        return ActionResult(server_error=str(e))
    except Exception:
        logger.exception("Failed to process weather sheet", filename=filename)
        return ActionResult(server_error=GENERIC_ERROR_MESSAGE)
    return ActionResult(data=rows)
