from __future__ import annotations

import logging
from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from ..models import fields as f
from ..models.customer_record import (
    DEFAULT_SALARY,
    DEPARTMENT_KEY,
    EXTERNAL_API,
    NOT_AVAILABLE,
    ORIGINAL_FIELDS,
    PHONE_SOURCE,
    CustomerRecord,
    parse_decimal,
)
from ..models.fields import FieldRole, find_field, role_for
from .phone_lookup import PhoneLookup

"""Customer field transformation and enrichment.

transform_cell normalizes one value by role, build_record resolves the
layout-specific columns into a CustomerRecord using fixed priority rules, and
enrich fills a missing phone number through the PhoneLookup collaborator.
"""

__all__ = [
    "CustomerTransformer",
]

logger = logging.getLogger(__name__)


def _blank(value: str | None) -> bool:
    return value is None or not value.strip()


class CustomerTransformer:
    """Normalizes raw CSV values and builds CustomerRecords.

    Args:
        phone_lookup: Optional enrichment service. When None, ``enrich`` returns
            records unchanged.
    """

    def __init__(self, phone_lookup: PhoneLookup | None = None) -> None:
        self.phone_lookup = phone_lookup

    # ------------------------------------------------------------------
    # cell level
    # ------------------------------------------------------------------
    def transform_cell(self, value: str, field_name: str) -> str:
        if value is None or not value.strip():
            return value
        role = role_for(field_name)
        if role is FieldRole.NAME:
            return self._transform_name(value)
        if role is FieldRole.EMAIL:
            return value.strip().lower()
        if role is FieldRole.PHONE:
            return self._transform_phone(value)
        if role is FieldRole.SALARY:
            return self._transform_salary(value)
        return value.strip()

    def transform_row(self, row: Mapping[str, str]) -> dict[str, str]:
        """Apply transform_cell to every column, keeping keys and order."""
        return {key: self.transform_cell(value, key) for key, value in row.items()}

    @staticmethod
    def _transform_name(value: str) -> str:
        words = value.strip().lower().split()
        return " ".join(word[0].upper() + word[1:] for word in words)

    @staticmethod
    def _transform_phone(value: str) -> str:
        cleaned = "".join(c for c in value if c.isdigit() or c == "+")
        if cleaned and not cleaned.startswith("+"):
            cleaned = "+" + cleaned
        return cleaned

    @staticmethod
    def _transform_salary(value: str) -> str:
        cleaned = "".join(c for c in value if c.isdigit() or c in ".,")
        return cleaned.replace(",", ".")

    # ------------------------------------------------------------------
    # record level
    # ------------------------------------------------------------------
    def build_record(self, row: Mapping[str, str]) -> CustomerRecord:
        """Build a CustomerRecord from one raw row.

        Priority rules:
        - identifier: first present of CustomerID, ID, EmployeeID
        - full name: "Full Name", else "Name Surname", else "FirstName LastName"
        - email: Email; else CorporateEmail (when non-blank, PersonalEmail becomes
          secondary) / PersonalEmail; else WorkEmail
        - phone: first present, non-blank of Phone, MobileNumber
        - salary: first present of Salary, AnnualSalary; 0 when absent or
          unparsable (rejected later by record validation)
        """
        values = self.transform_row(row)
        email, secondary_email = self._resolve_email(values)
        return CustomerRecord(
            identifier=self._resolve_identifier(values),
            full_name=self._resolve_full_name(values),
            email=email,
            secondary_email=secondary_email,
            phone=self._resolve_phone(values),
            salary=self._resolve_salary(values),
            metadata=self._build_metadata(row, values),
        )

    @staticmethod
    def _resolve_identifier(values: Mapping[str, str]) -> str:
        for header in f.IDENTIFIER_FIELDS:
            found = find_field(values, header)
            if found is not None:
                return found[1]
        return ""

    @staticmethod
    def _resolve_full_name(values: Mapping[str, str]) -> str:
        full_name = find_field(values, f.FULL_NAME)
        if full_name is not None:
            return full_name[1]
        for first_header, last_header in ((f.NAME, f.SURNAME), (f.FIRST_NAME, f.LAST_NAME)):
            first = find_field(values, first_header)
            last = find_field(values, last_header)
            if first is not None and last is not None:
                return f"{first[1]} {last[1]}"
        return ""

    @staticmethod
    def _resolve_email(values: Mapping[str, str]) -> tuple[str, str | None]:
        email = find_field(values, f.EMAIL)
        if email is not None:
            return email[1], None

        corporate = find_field(values, f.CORPORATE_EMAIL)
        personal = find_field(values, f.PERSONAL_EMAIL)
        if corporate is not None and personal is not None:
            # corporate が正 (空でなければ)
            if not _blank(corporate[1]):
                return corporate[1], (None if _blank(personal[1]) else personal[1])
            return personal[1], None
        if corporate is not None:
            return corporate[1], None
        if personal is not None:
            return personal[1], None

        work = find_field(values, f.WORK_EMAIL)
        if work is not None:
            return work[1], None
        return "", None

    @staticmethod
    def _resolve_phone(values: Mapping[str, str]) -> str | None:
        for header in f.PHONE_FIELDS:
            found = find_field(values, header)
            if found is not None and not _blank(found[1]):
                return found[1]
        return None

    @staticmethod
    def _resolve_salary(values: Mapping[str, str]) -> Decimal:
        for header in f.SALARY_FIELDS:
            found = find_field(values, header)
            if found is not None:
                salary = parse_decimal(found[1])
                return DEFAULT_SALARY if salary is None else salary
        return DEFAULT_SALARY

    @staticmethod
    def _build_metadata(row: Mapping[str, str], values: Mapping[str, str]) -> dict[str, Any]:
        metadata: dict[str, Any] = {ORIGINAL_FIELDS: ", ".join(row.keys())}
        department = find_field(values, f.DEPARTMENT)
        if department is not None:
            metadata[DEPARTMENT_KEY] = department[1]
        return metadata

    # ------------------------------------------------------------------
    # enrichment
    # ------------------------------------------------------------------
    async def enrich(self, record: CustomerRecord) -> CustomerRecord:
        """Fill a missing phone number from the external lookup.

        Lookup failures never propagate: the returned copy keeps phone None and
        tags metadata PhoneSource="Not Available".
        """
        if not _blank(record.phone) or _blank(record.identifier) or self.phone_lookup is None:
            return record
        try:
            phone = await self.phone_lookup.lookup_phone(record.identifier)
        except Exception as e:
            logger.warning("phone lookup failed id=%s: %s", record.identifier, e)
            return record.with_changes(
                phone=None, metadata={**record.metadata, PHONE_SOURCE: NOT_AVAILABLE}
            )
        if _blank(phone):
            logger.debug("phone lookup returned nothing id=%s", record.identifier)
            return record.with_changes(
                phone=None, metadata={**record.metadata, PHONE_SOURCE: NOT_AVAILABLE}
            )
        logger.debug("phone enriched id=%s", record.identifier)
        return record.with_changes(phone=phone, metadata={**record.metadata, PHONE_SOURCE: EXTERNAL_API})
