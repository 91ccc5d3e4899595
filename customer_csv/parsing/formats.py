from __future__ import annotations

from collections.abc import Mapping

from ..models import fields as f
from ..models.fields import lookup_field
from ..models.validation_outcome import ValidationOutcome
from .base import FormatSpec

"""Built-in CSV layouts.

TypeA: CustomerID, Full Name, Email, Phone, Salary
TypeB: ID, Name, Surname, CorporateEmail, PersonalEmail, Salary
TypeC: EmployeeID, FirstName, LastName, WorkEmail, MobileNumber, AnnualSalary, Department

Each layout adds its own row rules on top of the generic cell/row validation.
"""

__all__ = [
    "TYPE_A",
    "TYPE_B",
    "TYPE_C",
    "TYPE_A_SPEC",
    "TYPE_B_SPEC",
    "TYPE_C_SPEC",
    "BUILTIN_FORMATS",
]

TYPE_A = "TypeA"
TYPE_B = "TypeB"
TYPE_C = "TypeC"

MIN_NAME_PARTS = 2

MSG_FULL_NAME_FORMAT = "Full Name must contain at least first and last name (Row {row})"
MSG_NAME_AND_SURNAME = "Both Name and Surname must be provided (Row {row})"
MSG_BOTH_EMAILS_TYPE_B = "Both CorporateEmail and PersonalEmail must be provided (Row {row})"
MSG_FIRST_AND_LAST_NAME = "Both FirstName and LastName must be provided (Row {row})"
MSG_DEPARTMENT = "Department must be provided (Row {row})"


def _missing(row: Mapping[str, str], *headers: str) -> bool:
    """True when any header is absent from ``row`` or blank."""
    for header in headers:
        value = lookup_field(row, header)
        if value is None or not value.strip():
            return True
    return False


def check_type_a(row: Mapping[str, str], row_number: int, outcome: ValidationOutcome) -> None:
    full_name = lookup_field(row, f.FULL_NAME)
    if full_name and full_name.strip() and len(full_name.split()) < MIN_NAME_PARTS:
        outcome.add_error(MSG_FULL_NAME_FORMAT.format(row=row_number))


def check_type_b(row: Mapping[str, str], row_number: int, outcome: ValidationOutcome) -> None:
    if _missing(row, f.NAME, f.SURNAME):
        outcome.add_error(MSG_NAME_AND_SURNAME.format(row=row_number))
    # generic row rule only needs one of the two; TypeB needs both
    if _missing(row, f.CORPORATE_EMAIL, f.PERSONAL_EMAIL):
        outcome.add_error(MSG_BOTH_EMAILS_TYPE_B.format(row=row_number))


def check_type_c(row: Mapping[str, str], row_number: int, outcome: ValidationOutcome) -> None:
    if _missing(row, f.FIRST_NAME, f.LAST_NAME):
        outcome.add_error(MSG_FIRST_AND_LAST_NAME.format(row=row_number))
    if _missing(row, f.DEPARTMENT):
        outcome.add_error(MSG_DEPARTMENT.format(row=row_number))


TYPE_A_SPEC = FormatSpec(
    tag=TYPE_A,
    expected_headers=(f.CUSTOMER_ID, f.FULL_NAME, f.EMAIL, f.PHONE, f.SALARY),
    row_check=check_type_a,
    description="CustomerID, Full Name, Email, Phone, Salary",
)

TYPE_B_SPEC = FormatSpec(
    tag=TYPE_B,
    expected_headers=(f.ID, f.NAME, f.SURNAME, f.CORPORATE_EMAIL, f.PERSONAL_EMAIL, f.SALARY),
    row_check=check_type_b,
    description="ID, Name, Surname, CorporateEmail, PersonalEmail, Salary",
)

TYPE_C_SPEC = FormatSpec(
    tag=TYPE_C,
    expected_headers=(
        f.EMPLOYEE_ID,
        f.FIRST_NAME,
        f.LAST_NAME,
        f.WORK_EMAIL,
        f.MOBILE_NUMBER,
        f.ANNUAL_SALARY,
        f.DEPARTMENT,
    ),
    row_check=check_type_c,
    description="EmployeeID, FirstName, LastName, WorkEmail, MobileNumber, AnnualSalary, Department",
)

BUILTIN_FORMATS: tuple[FormatSpec, ...] = (TYPE_A_SPEC, TYPE_B_SPEC, TYPE_C_SPEC)
