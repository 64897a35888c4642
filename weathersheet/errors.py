"""
Exceptions raised while validating, reading and summarising weather sheets.
"""


class WeatherSheetError(Exception):
    """Base exception for weathersheet errors."""

    pass


class ValidationError(WeatherSheetError):
    """Request input does not satisfy the input contract.

    ``errors`` maps a field name to its list of messages.
    """

    def __init__(self, errors: dict[str, list[str]]):
        self.errors = errors
        details = "; ".join(
            f"{field}: {', '.join(messages)}" for field, messages in errors.items()
        )
        super().__init__(f"Invalid input ({details})")


class ParseError(WeatherSheetError):
    """The workbook could not be read into weather records.

    Raised when the workbook has no worksheet, the header row is empty, the
    header row has too few columns, or a date or time cell in a data row
    cannot be interpreted. The message is safe to show to the user as is.
    """

    pass
