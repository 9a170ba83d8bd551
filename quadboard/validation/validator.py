"""
Note Input Validation

Validates the raw fields of the "add note" form before anything
touches the board.

Checks, in order:
1. Description is non-empty after trimming
2. Date is present
3. Date is an ISO calendar date (YYYY-MM-DD)
4. Value is a finite decimal, with "." or "," as the fractional separator

IMPORTANT: Validation never mutates state and never silently fixes
input beyond trimming whitespace. Problems are reported for the user
to correct.
"""

import datetime as dt
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from quadboard.models.note import (
    Note,
    ValidationIssue,
    ValidationResult,
    new_note_id,
)


RawDate = Union[str, dt.date, None]
RawValue = Union[str, int, float, Decimal, None]

# Blobs hold values as JSON numbers (binary doubles), which keep this many
# significant digits exactly.
MAX_SIGNIFICANT_DIGITS = 15


class InputValidationError(Exception):
    """
    User-correctable input problem.

    `message` is the first issue's message, suitable for display.
    """

    def __init__(self, issues: list[ValidationIssue]):
        self.issues = issues
        self.message = issues[0].message if issues else "invalid input"
        super().__init__(self.message)

    @classmethod
    def single(cls, field: str, issue_type: str, message: str) -> "InputValidationError":
        return cls([ValidationIssue(field=field, issue_type=issue_type, message=message)])


def parse_value(raw: RawValue) -> Optional[Decimal]:
    """
    Parse a monetary value.

    Accepts numbers, or text using either "." or "," as the fractional
    separator ("12,50" == "12.50"). Returns None when the input is not a
    finite decimal, or has more than MAX_SIGNIFICANT_DIGITS significant
    digits.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, Decimal):
        value = raw
    elif isinstance(raw, (int, float)):
        value = Decimal(str(raw))
    else:
        text = str(raw).strip().replace(",", ".", 1)
        if not text:
            return None
        try:
            value = Decimal(text)
        except InvalidOperation:
            return None
    if not value.is_finite() or len(value.normalize().as_tuple().digits) > MAX_SIGNIFICANT_DIGITS:
        return None
    if Decimal(repr(float(value))) != value:
        # Out of range for a JSON number.
        return None
    return value


def parse_date(raw: RawDate) -> Optional[dt.date]:
    """Parse an ISO date. Returns None when the text is not a valid date."""
    if isinstance(raw, dt.datetime):
        return raw.date()
    if isinstance(raw, dt.date):
        return raw
    try:
        return dt.date.fromisoformat(str(raw).strip())
    except ValueError:
        return None


class NoteInputValidator:
    """
    Turns raw form input into a Note, or a list of issues.
    """

    def validate(
        self,
        raw_description: Optional[str],
        raw_date: RawDate,
        raw_value: RawValue,
        raw_obs: Optional[str] = "",
        note_id: Optional[str] = None,
    ) -> ValidationResult:
        """
        Validate raw input.

        Args:
            raw_description: Description as typed
            raw_date: ISO date text or a date
            raw_value: Value as typed, or a number
            raw_obs: Optional remark
            note_id: Id to use; a fresh one is generated if omitted

        Returns:
            ValidationResult with either issues or the built note
        """
        issues = []

        description = (raw_description or "").strip()
        if not description:
            issues.append(ValidationIssue(
                field="description",
                issue_type="missing",
                message="missing description",
                suggested_fix="Enter a short description",
            ))

        date = None
        if raw_date is None or (isinstance(raw_date, str) and not raw_date.strip()):
            issues.append(ValidationIssue(
                field="date",
                issue_type="missing",
                message="missing date",
                suggested_fix="Pick a date",
            ))
        else:
            date = parse_date(raw_date)
            if date is None:
                issues.append(ValidationIssue(
                    field="date",
                    issue_type="invalid_format",
                    message="invalid date",
                    suggested_fix="Use the YYYY-MM-DD format",
                ))

        value = parse_value(raw_value)
        if value is None:
            issues.append(ValidationIssue(
                field="value",
                issue_type="invalid_format",
                message="invalid numeric value",
                suggested_fix="Enter a number such as 1500.50 or 1500,50",
            ))

        if issues:
            return ValidationResult(issues=issues)

        note = Note(
            id=note_id or new_note_id(),
            description=description,
            date=date,
            value=value,
            obs=(raw_obs or "").strip(),
        )
        return ValidationResult(note=note)

    def build_note(
        self,
        raw_description: Optional[str],
        raw_date: RawDate,
        raw_value: RawValue,
        raw_obs: Optional[str] = "",
    ) -> Note:
        """Like `validate`, but raises InputValidationError on any issue."""
        result = self.validate(raw_description, raw_date, raw_value, raw_obs)
        if not result.is_valid:
            raise InputValidationError(result.issues)
        return result.note
