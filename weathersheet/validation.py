"""
Input contract for a processing request.

Field names follow the external interface (``startDate``, ``avgPerDate``,
...); the snake_case attribute names are accepted as well.
"""

import re
from datetime import date
from typing import Any, Optional

import pydantic
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)

from weathersheet.config import get_settings
from weathersheet.errors import ValidationError
from weathersheet.models import FilterCriteria

TIME_REGEX = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")

INVALID_FILE_TYPE_MESSAGE = "Invalid file type. Only xls and xlsx files are accepted"
INVALID_TIME_MESSAGE = "Invalid time format"


def is_valid_time(value: str) -> bool:
    """24-hour ``HH:MM``."""
    return bool(TIME_REGEX.match(value))


class UploadedFile(BaseModel):
    content: bytes = Field(repr=False)
    content_type: str
    filename: Optional[str] = None

    @model_validator(mode="after")
    def check_upload(self) -> "UploadedFile":
        settings = get_settings()
        if self.content_type not in settings.accepted_content_types:
            raise ValueError(INVALID_FILE_TYPE_MESSAGE)
        if len(self.content) > settings.max_upload_bytes:
            raise ValueError(
                f"File is too large. The limit is {settings.max_upload_bytes} bytes"
            )
        return self


class ProcessRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    file: UploadedFile
    start_date: Optional[date] = Field(default=None, alias="startDate")
    end_date: Optional[date] = Field(
        default=None, alias="endDate", validate_default=True
    )
    start_time: str = Field(alias="startTime")
    end_time: str = Field(alias="endTime")
    avg_per_date: bool = Field(default=False, alias="avgPerDate")

    @field_validator("end_date")
    @classmethod
    def check_date_range(
        cls, v: Optional[date], info: ValidationInfo
    ) -> Optional[date]:
        if "start_date" not in info.data:
            # start date already failed on its own
            return v
        start = info.data["start_date"]
        if (start is None) != (v is None):
            raise ValueError("Both start and end date are required for a date range")
        if start is not None and v < start:
            raise ValueError("End date must not be before the start date")
        return v

    @field_validator("start_time", "end_time")
    @classmethod
    def check_time(cls, v: str) -> str:
        if not is_valid_time(v):
            raise ValueError(INVALID_TIME_MESSAGE)
        return v

    def criteria(self) -> FilterCriteria:
        return FilterCriteria(
            start_time=self.start_time,
            end_time=self.end_time,
            start_date=self.start_date,
            end_date=self.end_date,
            group_by_date=self.avg_per_date,
        )


def _field_errors(exc: pydantic.ValidationError) -> dict[str, list[str]]:
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        field = str(error["loc"][0]) if error["loc"] else "_form"
        # defaults are validated under the attribute name, not the alias
        if field in ProcessRequest.model_fields:
            field = ProcessRequest.model_fields[field].alias or field
        if error["type"] == "value_error":
            message = str(error["ctx"]["error"])
        else:
            message = error["msg"]
        errors.setdefault(field, []).append(message)
    return errors


def validate_request(**fields: Any) -> ProcessRequest:
    """
    Validate raw request fields. Raises `weathersheet.errors.ValidationError`
    with per-field messages.
    """
    try:
        return ProcessRequest.model_validate(fields)
    except pydantic.ValidationError as exc:
        raise ValidationError(_field_errors(exc)) from exc
