"""Configuration for the network harvester."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .filter import InterfaceFilter
from .providers import PROVIDER_CHOICES


@dataclass
class HarvesterConfig:
    """Runtime configuration for the network harvester."""

    # Output directory for CSV and metadata files
    output_dir: Path = field(default_factory=lambda: Path.home() / "net_harvest")

    # Sampling interval in seconds
    interval: float = 1.0

    # CSV flush interval (flush every N rows)
    flush_every: int = 60

    # Maximum run duration in seconds (0 = unlimited)
    duration: int = 0

    # Counter provider: "auto", "sysfs" or "psutil"
    provider: str = "auto"

    # Base path of the net class directory for the sysfs provider
    sysfs_root: str = "/sys/class/net"

    # Interface name patterns (regular expressions, first match wins)
    filter_patterns: list[str] = field(default_factory=list)

    # True: patterns are exclusions.  False: patterns are the only inclusions.
    is_list_ignored: bool = True

    # Begin with network polling paused (toggle with SIGUSR1)
    start_paused: bool = False

    # Verbose logging
    debug: bool = False

    def __post_init__(self) -> None:
        self.output_dir = Path(self.output_dir)
        if self.interval <= 0:
            raise ValueError(f"interval must be positive, got {self.interval}")
        if self.flush_every < 1:
            raise ValueError(f"flush_every must be at least 1, got {self.flush_every}")
        if self.duration < 0:
            raise ValueError(f"duration must not be negative, got {self.duration}")
        if self.provider not in PROVIDER_CHOICES:
            raise ValueError(
                f"unknown provider {self.provider!r} "
                f"(choose from {', '.join(PROVIDER_CHOICES)})"
            )

    def build_filter(self) -> InterfaceFilter | None:
        """Compile the configured patterns, or None when there are none."""
        if not self.filter_patterns:
            return None
        return InterfaceFilter.from_patterns(
            self.filter_patterns, is_list_ignored=self.is_list_ignored
        )
