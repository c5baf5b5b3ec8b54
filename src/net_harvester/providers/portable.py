"""Network I/O counters via psutil, for hosts without sysfs."""

from __future__ import annotations

from typing import ClassVar

import psutil

from .base import UNIT_BYTES, InterfaceSample, ProviderUnavailable


class PsutilProvider:
    """Read per-NIC byte counters from ``psutil.net_io_counters``.

    Counters are cumulative since boot (or since the driver initialised
    them), in bytes.  psutil's wraparound compensation is turned off so
    that each call reports the raw OS counters; a counter that drops is
    passed through as-is and handled by the caller's sampling state.
    """

    unit: ClassVar[str] = UNIT_BYTES

    def read_counters(self) -> list[InterfaceSample]:
        """Read cumulative rx/tx byte counters for every NIC psutil reports."""
        try:
            pernic = psutil.net_io_counters(pernic=True, nowrap=False)
        except (OSError, RuntimeError) as e:
            raise ProviderUnavailable(f"psutil.net_io_counters failed: {e}") from e

        return [
            InterfaceSample(name=name, rx=counters.bytes_recv, tx=counters.bytes_sent)
            for name, counters in pernic.items()
        ]
