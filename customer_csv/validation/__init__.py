"""Cell, row and record validation for customer CSV data."""

from .customer_validator import CustomerValidator

__all__ = [
    "CustomerValidator",
]
