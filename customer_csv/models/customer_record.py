from __future__ import annotations

import re
from dataclasses import asdict, dataclass, field, replace
from decimal import Decimal, InvalidOperation
from typing import Any

"""CustomerRecord: the normalized output shared by every CSV layout.

Records are immutable. Later pipeline stages (enrichment) derive a new copy
through ``with_changes`` instead of mutating the instance handed out earlier.
"""

__all__ = [
    "CustomerRecord",
    "parse_decimal",
    "ORIGINAL_FIELDS",
    "DEPARTMENT_KEY",
    "PHONE_SOURCE",
    "EXTERNAL_API",
    "NOT_AVAILABLE",
]

# metadata keys
ORIGINAL_FIELDS = "OriginalFields"
DEPARTMENT_KEY = "Department"
PHONE_SOURCE = "PhoneSource"

# PhoneSource values
EXTERNAL_API = "External API"
NOT_AVAILABLE = "Not Available"

DEFAULT_SALARY = Decimal("0")
# 指数表記 (1E5) や区切り文字 (5_000) は受け付けない
PLAIN_DECIMAL_PATTERN = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)$", re.ASCII)


def parse_decimal(value: str | None) -> Decimal | None:
    """Parse a plain decimal string, returning None for blank or malformed input.

    Only sign, digits and one decimal point are accepted.
    """
    if value is None:
        return None
    text = value.strip()
    if not PLAIN_DECIMAL_PATTERN.match(text):
        return None
    try:
        return Decimal(text)
    except InvalidOperation:
        return None


@dataclass(frozen=True)
class CustomerRecord:
    """One accepted CSV row after transformation and enrichment.

    Attributes:
        identifier: CustomerID / ID / EmployeeID value
        full_name: Normalized "First Last" name
        email: Primary email address
        secondary_email: Personal email when a corporate one is primary
        phone: Phone number, possibly filled in by enrichment
        salary: Non-negative expected; 0 when the source cell was absent or malformed
        metadata: Ordered extra information (original columns, department, phone source)
    """
    identifier: str
    full_name: str
    email: str
    secondary_email: str | None = None
    phone: str | None = None
    salary: Decimal = DEFAULT_SALARY
    metadata: dict[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        # 呼び出し側の dict と共有しない
        object.__setattr__(self, "metadata", dict(self.metadata))

    def with_changes(self, **changes: Any) -> CustomerRecord:
        """Return a copy with the given fields overridden."""
        return replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["salary"] = str(self.salary)
        return data

    def __str__(self) -> str:
        parts = [
            f"id={self.identifier}",
            f"name={self.full_name}",
            f"email={self.email}",
        ]
        if self.secondary_email:
            parts.append(f"secondary_email={self.secondary_email}")
        parts.append(f"phone={self.phone or '-'}")
        parts.append(f"salary={self.salary}")
        return "CustomerRecord(" + ", ".join(parts) + ")"
