"""Command-line interface for the network harvester."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .config import HarvesterConfig
from .providers import PROVIDER_CHOICES


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="net-harvester",
        description="Sample host-wide network throughput in bits/sec",
    )
    parser.add_argument(
        "-o",
        "--output-dir",
        type=Path,
        default=Path.home() / "net_harvest",
        help="Output directory for CSV and metadata files (default: ~/net_harvest)",
    )
    parser.add_argument(
        "-i",
        "--interval",
        type=float,
        default=1.0,
        help="Sampling interval in seconds (default: 1.0)",
    )
    parser.add_argument(
        "--flush-every",
        type=int,
        default=60,
        help="Flush CSV every N rows (default: 60)",
    )
    parser.add_argument(
        "-d",
        "--duration",
        type=int,
        default=0,
        help="Run duration in seconds, 0 for unlimited (default: 0)",
    )
    parser.add_argument(
        "--provider",
        choices=PROVIDER_CHOICES,
        default="auto",
        help="Counter source (default: sysfs on Linux, psutil elsewhere)",
    )
    parser.add_argument(
        "--sysfs-root",
        default="/sys/class/net",
        help="Net class directory for the sysfs provider (default: /sys/class/net)",
    )
    parser.add_argument(
        "--filter",
        nargs="*",
        default=[],
        metavar="PATTERN",
        help="Interface name regexes to ignore, first match wins (e.g. '^lo$')",
    )
    parser.add_argument(
        "--allow",
        action="store_true",
        help="Treat --filter patterns as the only interfaces to count",
    )
    parser.add_argument(
        "--start-paused",
        action="store_true",
        help="Start with network polling paused; send SIGUSR1 to toggle",
    )
    parser.add_argument(
        "--list-interfaces",
        action="store_true",
        help="Print interfaces and filter decisions, then exit",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def parse_args(argv: list[str] | None = None) -> tuple[HarvesterConfig, bool]:
    """Parse command-line arguments.

    Returns:
        The HarvesterConfig and whether ``--list-interfaces`` was given.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        config = HarvesterConfig(
            output_dir=args.output_dir,
            interval=args.interval,
            flush_every=args.flush_every,
            duration=args.duration,
            provider=args.provider,
            sysfs_root=args.sysfs_root,
            filter_patterns=args.filter,
            is_list_ignored=not args.allow,
            start_paused=args.start_paused,
            debug=args.debug,
        )
        config.build_filter()
    except ValueError as e:
        parser.error(str(e))

    return config, args.list_interfaces


def main(argv: list[str] | None = None) -> None:
    """Entry point for the network harvester CLI."""
    config, list_only = parse_args(argv)

    logging.basicConfig(
        stream=sys.stderr,
        format="%(asctime)s [%(levelname)-5s] %(name)s - %(message)s",
        level=logging.DEBUG if config.debug else logging.INFO,
    )

    from .collector import print_inventory, run_harvester
    from .providers import ProviderUnavailable, default_provider_name, select_provider

    if list_only:
        name = default_provider_name() if config.provider == "auto" else config.provider
        provider = select_provider(name, sysfs_root=config.sysfs_root)
        try:
            print_inventory(provider, config.build_filter(), name)
        except ProviderUnavailable as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        return

    try:
        run_harvester(config)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        sys.exit(0)
