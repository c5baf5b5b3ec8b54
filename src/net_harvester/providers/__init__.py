"""Counter providers and platform selection."""

from __future__ import annotations

import sys
from collections.abc import Callable

from .base import (
    BITS_PER_UNIT,
    UNIT_BITS,
    UNIT_BYTES,
    CounterProvider,
    InterfaceSample,
    ProviderUnavailable,
)
from .portable import PsutilProvider
from .sysfs import SysfsProvider


def _make_sysfs(sysfs_root: str) -> CounterProvider:
    return SysfsProvider(sysfs_root)


def _make_psutil(sysfs_root: str) -> CounterProvider:
    return PsutilProvider()


# Provider name -> factory taking the sysfs root
PROVIDERS: dict[str, Callable[[str], CounterProvider]] = {
    "sysfs": _make_sysfs,
    "psutil": _make_psutil,
}

PROVIDER_CHOICES = ["auto", *PROVIDERS]


def default_provider_name(platform: str | None = None) -> str:
    """Return the provider name suited to ``platform`` (default: this host)."""
    platform = sys.platform if platform is None else platform
    return "sysfs" if platform.startswith("linux") else "psutil"


def select_provider(
    name: str = "auto",
    sysfs_root: str = "/sys/class/net",
) -> CounterProvider:
    """Instantiate a counter provider by name.

    Args:
        name: ``"auto"``, ``"sysfs"`` or ``"psutil"``.
        sysfs_root: Net class directory, used by ``SysfsProvider`` only.

    Raises:
        ValueError: If ``name`` is not a known provider.
    """
    if name == "auto":
        name = default_provider_name()
    try:
        factory = PROVIDERS[name]
    except KeyError:
        raise ValueError(
            f"unknown provider {name!r} (choose from {', '.join(PROVIDER_CHOICES)})"
        ) from None

    return factory(sysfs_root)


__all__ = [
    "BITS_PER_UNIT",
    "PROVIDERS",
    "PROVIDER_CHOICES",
    "UNIT_BITS",
    "UNIT_BYTES",
    "CounterProvider",
    "InterfaceSample",
    "ProviderUnavailable",
    "PsutilProvider",
    "SysfsProvider",
    "default_provider_name",
    "select_provider",
]
