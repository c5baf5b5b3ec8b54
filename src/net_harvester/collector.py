"""Main harvest loop with signal handling.

Selects a counter provider, samples it once per tick, and writes each
harvest to CSV.  Handles SIGTERM/SIGINT for graceful shutdown and
SIGUSR1 to pause or resume network polling.
"""

from __future__ import annotations

import logging
import signal
import sys
import time
from typing import TYPE_CHECKING

from .filter import should_include
from .harvest import NetworkHarvest, SamplingState, sample
from .providers import ProviderUnavailable, default_provider_name, select_provider
from .units import format_bits, format_rate
from .writer import HarvestWriter

if TYPE_CHECKING:
    from .config import HarvesterConfig
    from .filter import InterfaceFilter
    from .providers import CounterProvider

log = logging.getLogger(__name__)

_shutdown_requested = False
_polling_enabled = True


def _signal_handler(signum: int, frame: object) -> None:
    """Handle SIGTERM/SIGINT for graceful shutdown."""
    global _shutdown_requested
    _shutdown_requested = True


def _toggle_handler(signum: int, frame: object) -> None:
    """Handle SIGUSR1 by pausing or resuming network polling."""
    global _polling_enabled
    _polling_enabled = not _polling_enabled
    log.info("network polling %s", "resumed" if _polling_enabled else "paused")


def harvest_once(
    state: SamplingState,
    now: float,
    enabled: bool,
    rules: InterfaceFilter | None,
    provider: CounterProvider,
) -> NetworkHarvest | None:
    """Sample once, zeroing the rates of the first harvest after start."""
    harvest = sample(state, now, enabled, rules, provider)
    if harvest is not None and state.first_run:
        harvest = harvest.first_run_cleanup()
        state.first_run = False
    return harvest


def print_inventory(
    provider: CounterProvider,
    rules: InterfaceFilter | None,
    provider_name: str = "",
) -> None:
    """Print each interface the provider reports and whether it is counted."""
    if provider_name:
        print(f"  Provider: {provider_name} ({provider.unit})", file=sys.stderr)
    for iface in sorted(provider.read_counters(), key=lambda s: s.name):
        verdict = "include" if should_include(iface.name, rules) else "exclude"
        print(f"  {iface.name:<16} {verdict}", file=sys.stderr)


def run_harvester(config: HarvesterConfig) -> None:
    """Run the main harvest loop."""
    global _shutdown_requested, _polling_enabled
    _shutdown_requested = False
    _polling_enabled = not config.start_paused

    signal.signal(signal.SIGTERM, _signal_handler)
    signal.signal(signal.SIGINT, _signal_handler)
    if hasattr(signal, "SIGUSR1"):
        signal.signal(signal.SIGUSR1, _toggle_handler)

    rules = config.build_filter()
    provider_name = (
        default_provider_name() if config.provider == "auto" else config.provider
    )
    provider = select_provider(provider_name, sysfs_root=config.sysfs_root)

    print("Discovering interfaces...", file=sys.stderr)
    try:
        print_inventory(provider, rules, provider_name)
    except ProviderUnavailable as e:
        log.warning("interface inventory unavailable: %s", e)

    writer = HarvestWriter(config, provider_name=provider_name)

    start_mono = time.monotonic()
    state = SamplingState(prev_access_time=start_mono)
    last: NetworkHarvest | None = None
    try:
        with writer:
            print(f"\nHarvesting to {writer.csv_path}", file=sys.stderr)
            print(
                f"  Interval: {config.interval}s, "
                f"flush every {config.flush_every} rows",
                file=sys.stderr,
            )
            if config.duration > 0:
                print(f"  Duration: {config.duration}s", file=sys.stderr)
            print("  Press Ctrl+C to stop.\n", file=sys.stderr)

            next_tick = time.monotonic()

            while not _shutdown_requested:
                if config.duration > 0:
                    elapsed = time.monotonic() - start_mono
                    if elapsed >= config.duration:
                        print(
                            f"\nDuration limit reached ({config.duration}s).",
                            file=sys.stderr,
                        )
                        break

                now = time.monotonic()
                try:
                    harvest = harvest_once(
                        state, now, _polling_enabled, rules, provider
                    )
                except ProviderUnavailable as e:
                    log.warning("skipping cycle: %s", e)
                    harvest = None

                if harvest is not None:
                    writer.write(
                        harvest, time.time_ns(), int(now * 1_000_000_000)
                    )
                    last = harvest

                    # Progress indicator every 60 rows
                    if writer.rows_written % 60 == 0:
                        print(
                            f"  [{writer.rows_written} rows] "
                            f"rx {format_rate(harvest.rx)}, "
                            f"tx {format_rate(harvest.tx)}",
                            file=sys.stderr,
                        )

                # Sleep until next tick (compensate for read time)
                next_tick += config.interval
                sleep_time = next_tick - time.monotonic()
                if sleep_time > 0:
                    time.sleep(sleep_time)
                else:
                    missed = int(-sleep_time / config.interval)
                    if missed > 0:
                        print(
                            f"Warning: missed {missed} tick(s), resynchronizing",
                            file=sys.stderr,
                        )
                    next_tick = time.monotonic()

    finally:
        total_elapsed = time.monotonic() - start_mono
        print(
            f"\nDone. {writer.rows_written} rows in {total_elapsed:.1f}s "
            f"({writer.csv_path})",
            file=sys.stderr,
        )
        if last is not None:
            print(
                f"  Total: rx {format_bits(last.total_rx)}, "
                f"tx {format_bits(last.total_tx)}",
                file=sys.stderr,
            )
