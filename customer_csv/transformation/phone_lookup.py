from __future__ import annotations

import asyncio
from typing import Protocol, runtime_checkable

"""Phone lookup collaborator used by enrichment.

The parser only depends on the ``PhoneLookup`` protocol: given an identifier,
asynchronously return a phone number (or None). Any exception raised by an
implementation is treated the same way by the transformer.
"""

__all__ = [
    "PhoneLookup",
    "SimulatedPhoneLookup",
]

DEFAULT_DELAY_SECONDS = 0.1
DEFAULT_PREFIX = "+1-555-"
PAD_LENGTH = 4
PAD_CHAR = "0"


@runtime_checkable
class PhoneLookup(Protocol):
    """External "fetch phone by id" service."""

    async def lookup_phone(self, identifier: str) -> str | None: ...


class SimulatedPhoneLookup:
    """Offline stand-in for the phone service.

    Sleeps ``delay_seconds`` to mimic network latency, then derives a number
    from the identifier: ``prefix + identifier`` left-padded with zeros to 4.
    """

    def __init__(self, delay_seconds: float = DEFAULT_DELAY_SECONDS, prefix: str = DEFAULT_PREFIX) -> None:
        if delay_seconds < 0:
            raise ValueError("delay_seconds must be >= 0")
        self.delay_seconds = delay_seconds
        self.prefix = prefix
        self.calls = 0

    async def lookup_phone(self, identifier: str) -> str | None:
        self.calls += 1
        if self.delay_seconds:
            await asyncio.sleep(self.delay_seconds)
        return f"{self.prefix}{identifier.rjust(PAD_LENGTH, PAD_CHAR)}"
