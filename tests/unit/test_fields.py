from __future__ import annotations

import pytest

from customer_csv.models import fields as f
from customer_csv.models.fields import FieldRole, find_field, lookup_field, role_for


@pytest.mark.parametrize(
    "header,role",
    [
        ("CustomerID", FieldRole.IDENTIFIER),
        ("id", FieldRole.IDENTIFIER),
        ("EMPLOYEEID", FieldRole.IDENTIFIER),
        ("Full Name", FieldRole.NAME),
        ("surname", FieldRole.NAME),
        ("WorkEmail", FieldRole.EMAIL),
        (" personalemail ", FieldRole.EMAIL),
        ("MobileNumber", FieldRole.PHONE),
        ("AnnualSalary", FieldRole.SALARY),
        ("Department", FieldRole.DEPARTMENT),
    ],
)
def test_role_for_known_headers(header, role):
    assert role_for(header) is role


@pytest.mark.parametrize("header", ["Notes", "", None, "Full_Name"])
def test_role_for_unknown_headers(header):
    assert role_for(header) is None


def test_find_field_prefers_exact_key():
    row = {"email": "lower@example.com", "Email": "exact@example.com"}
    assert find_field(row, f.EMAIL) == ("Email", "exact@example.com")


def test_find_field_case_insensitive_fallback():
    row = {"CUSTOMERID": "CUST001"}
    assert find_field(row, f.CUSTOMER_ID) == ("CUSTOMERID", "CUST001")
    assert lookup_field(row, "customerid") == "CUST001"


def test_find_field_absent():
    assert find_field({"Name": "x"}, f.SURNAME) is None
    assert lookup_field({}, f.EMAIL) is None


def test_role_fields_priority_order():
    assert f.IDENTIFIER_FIELDS == ("CustomerID", "ID", "EmployeeID")
    assert f.PHONE_FIELDS == ("Phone", "MobileNumber")
    assert f.SALARY_FIELDS == ("Salary", "AnnualSalary")
