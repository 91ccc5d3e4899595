from __future__ import annotations

from dataclasses import FrozenInstanceError
from decimal import Decimal

import pytest

from customer_csv.models.customer_record import (
    PHONE_SOURCE,
    CustomerRecord,
    parse_decimal,
)


def _record(**overrides) -> CustomerRecord:
    data = dict(
        identifier="CUST001",
        full_name="John Doe",
        email="john@example.com",
        salary=Decimal("55000"),
    )
    data.update(overrides)
    return CustomerRecord(**data)


@pytest.mark.parametrize(
    "text,expected",
    [
        ("55000", Decimal("55000")),
        (" 62000.50 ", Decimal("62000.50")),
        ("-1", Decimal("-1")),
        ("", None),
        ("   ", None),
        (None, None),
        ("abc", None),
        ("NaN", None),
        ("Infinity", None),
        ("1E5", None),
        ("5_000", None),
        ("12.5.0", None),
        (".5", Decimal("0.5")),
    ],
)
def test_parse_decimal(text, expected):
    assert parse_decimal(text) == expected


def test_record_defaults():
    r = CustomerRecord(identifier="X01", full_name="A B", email="a@b.co")
    assert r.secondary_email is None
    assert r.phone is None
    assert r.salary == Decimal("0")
    assert r.metadata == {}


def test_record_is_immutable():
    r = _record()
    with pytest.raises(FrozenInstanceError):
        r.phone = "+1"  # type: ignore[misc]


def test_metadata_is_copied_from_caller():
    meta = {"OriginalFields": "CustomerID"}
    r = _record(metadata=meta)
    meta["extra"] = "x"
    assert "extra" not in r.metadata


def test_with_changes_returns_new_instance():
    r = _record()
    r2 = r.with_changes(phone="+1-555-0001", metadata={PHONE_SOURCE: "External API"})
    assert r.phone is None
    assert r.metadata == {}
    assert r2.phone == "+1-555-0001"
    assert r2.identifier == r.identifier


def test_to_dict_renders_salary_as_string():
    data = _record(salary=Decimal("62000.50")).to_dict()
    assert data["salary"] == "62000.50"
    assert data["identifier"] == "CUST001"
    assert set(data) == {"identifier", "full_name", "email", "secondary_email", "phone", "salary", "metadata"}


def test_str_lists_optional_fields_only_when_present():
    text = str(_record())
    assert text.startswith("CustomerRecord(id=CUST001, name=John Doe, email=john@example.com")
    assert "secondary_email" not in text
    assert "phone=-" in text

    text2 = str(_record(secondary_email="j@home.com", phone="+123"))
    assert "secondary_email=j@home.com" in text2
    assert "phone=+123" in text2
