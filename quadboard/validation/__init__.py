"""Input validation package."""

from quadboard.validation.validator import (
    InputValidationError,
    NoteInputValidator,
    parse_date,
    parse_value,
)

__all__ = [
    "InputValidationError",
    "NoteInputValidator",
    "parse_date",
    "parse_value",
]
