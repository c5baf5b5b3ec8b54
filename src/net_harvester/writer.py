"""CSV sink for network harvests.

Each harvest becomes one row of bit-denominated rates and totals
stamped with wall-clock and monotonic time.  A ``.meta.json`` sidecar
records the host, provider, filter and configuration when the file is
opened, and the end time and row count when it is closed.
"""

from __future__ import annotations

import csv
import json
import os
import platform
import socket
import time
from dataclasses import asdict
from typing import TYPE_CHECKING, Any, TextIO

if TYPE_CHECKING:
    from pathlib import Path

    from .config import HarvesterConfig
    from .harvest import NetworkHarvest

COLUMNS: list[str] = [
    "ts_realtime_ns",
    "ts_monotonic_ns",
    "rx_bps",
    "tx_bps",
    "total_rx_bits",
    "total_tx_bits",
]


def _utc_now() -> str:
    return time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())


class HarvestWriter:
    """Append harvests to a CSV file; use as a context manager.

    Rows are fsynced every ``config.flush_every`` harvests and on close.
    """

    def __init__(self, config: HarvesterConfig, provider_name: str = "") -> None:
        self._config = config
        self._provider_name = provider_name

        stamp = time.strftime("%Y%m%d_%H%M%S", time.gmtime())
        stem = f"netharvest_{socket.gethostname()}_{stamp}"
        self.csv_path: Path = config.output_dir / f"{stem}.csv"
        self.meta_path: Path = config.output_dir / f"{stem}.meta.json"
        self.rows_written = 0

        self._fh: TextIO | None = None
        self._rows: Any = None  # csv writer bound to _fh

    def __enter__(self) -> HarvestWriter:
        self._config.output_dir.mkdir(parents=True, exist_ok=True)
        self._fh = self.csv_path.open("w", newline="")
        self._rows = csv.writer(self._fh)
        self._rows.writerow(COLUMNS)
        self._dump_meta(self._start_meta())
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def write(
        self,
        harvest: NetworkHarvest,
        ts_realtime_ns: int,
        ts_monotonic_ns: int,
    ) -> None:
        """Append one harvest with the times it was taken."""
        if self._rows is None:
            raise RuntimeError("HarvestWriter is not open; use it in a with block")

        self._rows.writerow(
            [
                ts_realtime_ns,
                ts_monotonic_ns,
                harvest.rx,
                harvest.tx,
                harvest.total_rx,
                harvest.total_tx,
            ]
        )
        self.rows_written += 1
        if self.rows_written % self._config.flush_every == 0:
            self._sync()

    def close(self) -> None:
        """Sync and close the CSV, then stamp the sidecar with final totals."""
        if self._fh is None:
            return
        self._sync()
        self._fh.close()
        self._fh = None
        self._rows = None

        meta = json.loads(self.meta_path.read_text())
        meta["end_time_utc"] = _utc_now()
        meta["total_rows"] = self.rows_written
        self._dump_meta(meta)

    def _sync(self) -> None:
        if self._fh is not None:
            self._fh.flush()
            os.fsync(self._fh.fileno())

    def _start_meta(self) -> dict[str, Any]:
        config = asdict(self._config)
        config["output_dir"] = str(config["output_dir"])
        return {
            "hostname": socket.gethostname(),
            "platform": platform.platform(),
            "python_version": platform.python_version(),
            "pid": os.getpid(),
            "start_time_utc": _utc_now(),
            "csv_file": self.csv_path.name,
            "provider": self._provider_name,
            "filter": {
                "patterns": list(self._config.filter_patterns),
                "is_list_ignored": self._config.is_list_ignored,
            },
            "units": "bits",
            "columns": COLUMNS,
            "config": config,
        }

    def _dump_meta(self, meta: dict[str, Any]) -> None:
        self.meta_path.write_text(json.dumps(meta, indent=2))
