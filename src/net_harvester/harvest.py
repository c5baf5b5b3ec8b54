"""Host-wide network throughput from cumulative interface counters.

``sample()`` sums the filtered counters of every interface a provider
reports, then turns the change since the previous sample into a
bits-per-second rate.  Counters that go backwards (interface reset,
driver reload, 32-bit wraparound) yield a rate of zero rather than a
negative or wrapped value.

All values are in bits.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from .filter import should_include
from .providers.base import BITS_PER_UNIT

if TYPE_CHECKING:
    from .filter import InterfaceFilter
    from .providers.base import CounterProvider


@dataclass(frozen=True)
class NetworkHarvest:
    """One sampling cycle's result."""

    rx: int  # bits/sec received
    tx: int  # bits/sec transmitted
    total_rx: int  # bits received, cumulative
    total_tx: int  # bits transmitted, cumulative

    def first_run_cleanup(self) -> NetworkHarvest:
        """Return a copy with the rates zeroed.

        The first delta after start measures everything the OS counted
        before monitoring began, so it is not a rate.
        """
        return replace(self, rx=0, tx=0)


@dataclass
class SamplingState:
    """Totals and timestamp carried from one sample to the next."""

    prev_access_time: float  # monotonic seconds
    prev_rx: int = 0
    prev_tx: int = 0

    # Cleared by the harvest loop after its first successful sample
    first_run: bool = True


def _rate(total: int, prev: int, elapsed: float) -> int:
    # Saturating subtraction: a counter below its previous value means
    # a reset, which reads as no traffic.
    return int(max(total - prev, 0) / elapsed)


def sample(
    state: SamplingState,
    now: float,
    enabled: bool,
    rules: InterfaceFilter | None,
    provider: CounterProvider,
) -> NetworkHarvest | None:
    """Take one network sample and update ``state``.

    Args:
        state: Previous totals and access time.  Updated in place, but
            only once the provider read has succeeded.
        now: Current monotonic time in seconds.
        enabled: If False, return None without querying the provider.
        rules: Interface filter, or None to include every interface.
        provider: Source of cumulative per-interface counters.

    Returns:
        The harvest for this cycle, or None when sampling is disabled.

    Raises:
        ProviderUnavailable: If the provider query fails.
        ValueError: If the provider reports an unknown unit.
    """
    if not enabled:
        return None

    try:
        to_bits = BITS_PER_UNIT[provider.unit]
    except KeyError:
        raise ValueError(f"unknown counter unit {provider.unit!r}") from None

    total_rx = 0
    total_tx = 0
    for iface in provider.read_counters():
        if should_include(iface.name, rules):
            total_rx += iface.rx * to_bits
            total_tx += iface.tx * to_bits

    elapsed = now - state.prev_access_time
    if elapsed <= 0:
        # Duplicate tick; a monotonic clock never goes backwards
        rx, tx = 0, 0
    else:
        rx = _rate(total_rx, state.prev_rx, elapsed)
        tx = _rate(total_tx, state.prev_tx, elapsed)

    state.prev_rx = total_rx
    state.prev_tx = total_tx
    state.prev_access_time = now

    return NetworkHarvest(rx=rx, tx=tx, total_rx=total_rx, total_tx=total_tx)
