from __future__ import annotations

from collections.abc import Mapping
from enum import Enum

"""Column vocabulary shared by the validator, transformer and format parsers.

Each supported CSV layout names the same semantic columns differently
(CustomerID / ID / EmployeeID ...). The tuples below list the display form of
every header in priority order; role lookup is case-insensitive.
"""

__all__ = [
    "FieldRole",
    "ROLE_FIELDS",
    "role_for",
    "find_field",
    "lookup_field",
]


class FieldRole(Enum):
    """Semantic category of a column, independent of its literal header."""
    IDENTIFIER = "identifier"
    NAME = "name"
    EMAIL = "email"
    PHONE = "phone"
    SALARY = "salary"
    DEPARTMENT = "department"


# Identifier
CUSTOMER_ID = "CustomerID"
ID = "ID"
EMPLOYEE_ID = "EmployeeID"

# Names
FULL_NAME = "Full Name"
NAME = "Name"
SURNAME = "Surname"
FIRST_NAME = "FirstName"
LAST_NAME = "LastName"

# Emails
EMAIL = "Email"
CORPORATE_EMAIL = "CorporateEmail"
PERSONAL_EMAIL = "PersonalEmail"
WORK_EMAIL = "WorkEmail"

# Phones
PHONE = "Phone"
MOBILE_NUMBER = "MobileNumber"

# Salaries
SALARY = "Salary"
ANNUAL_SALARY = "AnnualSalary"

# TypeC only
DEPARTMENT = "Department"

IDENTIFIER_FIELDS: tuple[str, ...] = (CUSTOMER_ID, ID, EMPLOYEE_ID)
NAME_FIELDS: tuple[str, ...] = (FULL_NAME, NAME, SURNAME, FIRST_NAME, LAST_NAME)
EMAIL_FIELDS: tuple[str, ...] = (EMAIL, CORPORATE_EMAIL, PERSONAL_EMAIL, WORK_EMAIL)
PHONE_FIELDS: tuple[str, ...] = (PHONE, MOBILE_NUMBER)
SALARY_FIELDS: tuple[str, ...] = (SALARY, ANNUAL_SALARY)
DEPARTMENT_FIELDS: tuple[str, ...] = (DEPARTMENT,)

ROLE_FIELDS: dict[FieldRole, tuple[str, ...]] = {
    FieldRole.IDENTIFIER: IDENTIFIER_FIELDS,
    FieldRole.NAME: NAME_FIELDS,
    FieldRole.EMAIL: EMAIL_FIELDS,
    FieldRole.PHONE: PHONE_FIELDS,
    FieldRole.SALARY: SALARY_FIELDS,
    FieldRole.DEPARTMENT: DEPARTMENT_FIELDS,
}

# 小文字化したヘッダ -> role
_ROLE_BY_KEY: dict[str, FieldRole] = {
    name.lower(): role for role, names in ROLE_FIELDS.items() for name in names
}


def role_for(field_name: str | None) -> FieldRole | None:
    """Return the semantic role of a header, or None for unmapped columns."""
    if not field_name:
        return None
    return _ROLE_BY_KEY.get(field_name.strip().lower())


def find_field(row: Mapping[str, str], header: str) -> tuple[str, str] | None:
    """Locate ``header`` in a raw row, returning ``(actual_key, value)``.

    Exact key match wins; otherwise the first key equal ignoring case.
    """
    if header in row:
        return header, row[header]
    wanted = header.lower()
    for key, value in row.items():
        if key.lower() == wanted:
            return key, value
    return None


def lookup_field(row: Mapping[str, str], header: str) -> str | None:
    found = find_field(row, header)
    return None if found is None else found[1]
