"""Value normalization, record building and phone enrichment."""

from .customer_transformer import CustomerTransformer
from .phone_lookup import PhoneLookup, SimulatedPhoneLookup

__all__ = [
    "CustomerTransformer",
    "PhoneLookup",
    "SimulatedPhoneLookup",
]
