"""Human-readable formatting of bit rates and bit counts."""

from __future__ import annotations

_PREFIXES = ["", "K", "M", "G", "T", "P"]


def _scale(value: float) -> tuple[float, str]:
    """Scale ``value`` by powers of 1024 until it is below 1024."""
    for prefix in _PREFIXES[:-1]:
        if abs(value) < 1024.0:
            return value, prefix
        value /= 1024.0
    return value, _PREFIXES[-1]


def format_rate(bits_per_sec: float) -> str:
    """Format a rate, e.g. ``format_rate(1572864) == "1.5 Mbit/s"``."""
    value, prefix = _scale(bits_per_sec)
    return f"{value:.1f} {prefix}bit/s"


def format_bits(bits: float) -> str:
    """Format a bit count, e.g. ``format_bits(2048) == "2.0 Kbit"``."""
    value, prefix = _scale(bits)
    return f"{value:.1f} {prefix}bit"
