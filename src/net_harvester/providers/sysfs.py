"""Network I/O counters from sysfs.

Reads per-interface cumulative byte counters from
/sys/class/net/{iface}/statistics/.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import ClassVar

from .base import UNIT_BYTES, InterfaceSample, ProviderUnavailable

log = logging.getLogger(__name__)


class SysfsProvider:
    """Read network interface byte counters from sysfs (Linux).

    Values are cumulative counters as reported by the kernel, in bytes.
    """

    unit: ClassVar[str] = UNIT_BYTES

    def __init__(self, sysfs_root: str = "/sys/class/net") -> None:
        self._root = Path(sysfs_root)

    def discover_interfaces(self) -> list[str]:
        """List interfaces that expose a statistics directory.

        Returns:
            Sorted list of interface names.

        Raises:
            ProviderUnavailable: If the sysfs root cannot be listed.
        """
        try:
            entries = sorted(self._root.iterdir())
        except OSError as e:
            raise ProviderUnavailable(
                f"cannot list network interfaces under {self._root}: {e}"
            ) from e

        return [
            entry.name for entry in entries if (entry / "statistics").is_dir()
        ]

    def _read_stat(self, iface: str, stat: str) -> int:
        raw = (self._root / iface / "statistics" / stat).read_text().strip()
        return int(raw)

    def read_counters(self) -> list[InterfaceSample]:
        """Read cumulative rx/tx byte counters for every interface.

        Interfaces whose counters cannot be read or parsed are skipped.
        """
        samples: list[InterfaceSample] = []
        for iface in self.discover_interfaces():
            try:
                rx = self._read_stat(iface, "rx_bytes")
                tx = self._read_stat(iface, "tx_bytes")
            except (OSError, ValueError) as e:
                # Interfaces can vanish between listing and reading
                log.debug("skipping interface %s: %s", iface, e)
                continue
            samples.append(InterfaceSample(name=iface, rx=rx, tx=tx))
        return samples
