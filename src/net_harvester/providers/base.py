"""Shared contract for network counter providers.

A provider enumerates the interfaces the OS knows about together with
their cumulative receive/transmit counters.  Providers are stateless;
all continuity between polls lives in the caller's ``SamplingState``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

UNIT_BYTES = "bytes"
UNIT_BITS = "bits"

# Multiplier that converts a provider's native unit to bits
BITS_PER_UNIT: dict[str, int] = {
    UNIT_BYTES: 8,
    UNIT_BITS: 1,
}


class ProviderUnavailable(OSError):
    """The OS-level counter query failed as a whole."""


@dataclass(frozen=True)
class InterfaceSample:
    """Cumulative counters for one interface from a single poll."""

    name: str
    rx: int  # received, in the provider's unit
    tx: int  # transmitted, in the provider's unit


class CounterProvider(Protocol):
    """Protocol for all counter providers."""

    unit: str

    def read_counters(self) -> list[InterfaceSample]: ...
