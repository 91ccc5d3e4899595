from __future__ import annotations

import re
from collections.abc import Mapping

from ..models import fields as f
from ..models.customer_record import CustomerRecord, parse_decimal
from ..models.fields import FieldRole, find_field, role_for
from ..models.validation_outcome import ValidationOutcome

"""Customer field validation.

Three layers, each catching a different class of defect:

- validate_cell: role-generic rule for one raw value (reusable across layouts)
- validate_row: which columns are mandatory for the header set of this row
- validate_record: final, layout-independent gate on the built record

Blank cells are valid at the cell layer; absence is reported by the row layer
so the same defect is not reported twice.
"""

__all__ = [
    "CustomerValidator",
    "EMAIL_PATTERN",
    "PHONE_PATTERN",
]

MIN_ID_LENGTH = 3
MIN_NAME_LENGTH = 2
MIN_SALARY = 0

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
PHONE_PATTERN = re.compile(r"^\+?[1-9][0-9]{0,15}$")

# cell
MSG_ID_EMPTY = "ID cannot be empty"
MSG_ID_TOO_SHORT = "ID must be at least 3 characters long"
MSG_NAME_EMPTY = "Name cannot be empty"
MSG_NAME_TOO_SHORT = "Name must be at least 2 characters long"
MSG_NAME_CHARACTERS = "Name contains invalid characters: {value}"
MSG_INVALID_EMAIL = "Invalid email format: {value}"
MSG_INVALID_PHONE = "Invalid phone number format: {value}"
MSG_INVALID_SALARY = "Invalid salary value: {value}. Must be a positive number."
# row
MSG_REQUIRED_FIELD = "Required field '{field}' cannot be empty (Row {row})"
MSG_EMAIL_REQUIRED = "At least one email address must be provided (Row {row})"
# record
MSG_CUSTOMER_ID_EMPTY = "Customer ID cannot be empty (Row {row})"
MSG_FULL_NAME_EMPTY = "Full name cannot be empty (Row {row})"
MSG_EMAIL_EMPTY = "Email cannot be empty (Row {row})"
MSG_INVALID_EMAIL_ROW = "Invalid email format: {value} (Row {row})"
MSG_SALARY_POSITIVE = "Salary must be greater than zero (Row {row})"


def _blank(value: str | None) -> bool:
    return value is None or not value.strip()


class CustomerValidator:
    """Validates raw cells, raw rows and built CustomerRecords."""

    def validate_cell(
        self, value: str | None, field_name: str, row_number: int, column_number: int | None = None
    ) -> ValidationOutcome:
        outcome = ValidationOutcome(row_number, column_number)
        if _blank(value):
            return outcome
        role = role_for(field_name)
        if role is FieldRole.IDENTIFIER:
            self._validate_identifier(value, outcome)
        elif role is FieldRole.NAME:
            self._validate_name(value, outcome)
        elif role is FieldRole.EMAIL:
            self._validate_email(value, outcome)
        elif role is FieldRole.PHONE:
            self._validate_phone(value, outcome)
        elif role is FieldRole.SALARY:
            self._validate_salary(value, outcome)
        return outcome

    def validate_row(self, row: Mapping[str, str], row_number: int) -> ValidationOutcome:
        """Check cross-field rules for the columns actually present in ``row``."""
        outcome = ValidationOutcome(row_number)
        for key in self._required_fields(row):
            if _blank(row.get(key)):
                outcome.add_error(MSG_REQUIRED_FIELD.format(field=key, row=row_number))

        corporate = find_field(row, f.CORPORATE_EMAIL)
        personal = find_field(row, f.PERSONAL_EMAIL)
        if corporate is not None and personal is not None:
            if _blank(corporate[1]) and _blank(personal[1]):
                outcome.add_error(MSG_EMAIL_REQUIRED.format(row=row_number))
        return outcome

    def validate_record(self, record: CustomerRecord, row_number: int) -> ValidationOutcome:
        outcome = ValidationOutcome(row_number)
        if _blank(record.identifier):
            outcome.add_error(MSG_CUSTOMER_ID_EMPTY.format(row=row_number))
        if _blank(record.full_name):
            outcome.add_error(MSG_FULL_NAME_EMPTY.format(row=row_number))
        if _blank(record.email):
            outcome.add_error(MSG_EMAIL_EMPTY.format(row=row_number))
        elif not EMAIL_PATTERN.match(record.email):
            outcome.add_error(MSG_INVALID_EMAIL_ROW.format(value=record.email, row=row_number))
        if record.salary <= MIN_SALARY:
            outcome.add_error(MSG_SALARY_POSITIVE.format(row=row_number))
        return outcome

    # ------------------------------------------------------------------
    # cell rules
    # ------------------------------------------------------------------
    @staticmethod
    def _validate_identifier(value: str, outcome: ValidationOutcome) -> None:
        if not value.strip():
            outcome.add_error(MSG_ID_EMPTY)
        elif len(value) < MIN_ID_LENGTH:
            outcome.add_error(MSG_ID_TOO_SHORT)

    @staticmethod
    def _validate_name(value: str, outcome: ValidationOutcome) -> None:
        if not value.strip():
            outcome.add_error(MSG_NAME_EMPTY)
        elif len(value) < MIN_NAME_LENGTH:
            outcome.add_error(MSG_NAME_TOO_SHORT)
        elif not all(c.isalpha() or c.isspace() or c in "-'" for c in value):
            outcome.add_error(MSG_NAME_CHARACTERS.format(value=value))

    @staticmethod
    def _validate_email(value: str, outcome: ValidationOutcome) -> None:
        if not EMAIL_PATTERN.match(value):
            outcome.add_error(MSG_INVALID_EMAIL.format(value=value))

    @staticmethod
    def _validate_phone(value: str, outcome: ValidationOutcome) -> None:
        if not PHONE_PATTERN.match(value):
            outcome.add_error(MSG_INVALID_PHONE.format(value=value))

    @staticmethod
    def _validate_salary(value: str, outcome: ValidationOutcome) -> None:
        salary = parse_decimal(value)
        if salary is None or salary <= MIN_SALARY:
            outcome.add_error(MSG_INVALID_SALARY.format(value=value))

    # ------------------------------------------------------------------
    # row helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _required_fields(row: Mapping[str, str]) -> list[str]:
        """Return the actual row keys that must be non-blank for this header set.

        Corporate/Personal email pairs are not listed: at least one of the two is
        enough here, checked separately in validate_row.
        """
        required: list[str] = []

        for header in f.IDENTIFIER_FIELDS:
            found = find_field(row, header)
            if found is not None:
                required.append(found[0])
                break

        name_groups = ((f.FULL_NAME,), (f.NAME, f.SURNAME), (f.FIRST_NAME, f.LAST_NAME))
        for group in name_groups:
            found_group = [find_field(row, h) for h in group]
            if all(found is not None for found in found_group):
                required.extend(found[0] for found in found_group if found is not None)
                break

        email = find_field(row, f.EMAIL)
        if email is not None:
            required.append(email[0])
        elif find_field(row, f.CORPORATE_EMAIL) is None and find_field(row, f.PERSONAL_EMAIL) is None:
            work = find_field(row, f.WORK_EMAIL)
            if work is not None:
                required.append(work[0])

        for header in f.SALARY_FIELDS:
            found = find_field(row, header)
            if found is not None:
                required.append(found[0])
                break

        return required
