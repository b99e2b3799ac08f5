from __future__ import annotations

import logging
import re
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable

from json_store import write_json

from .models import Database

logger = logging.getLogger(__name__)

INTERVAL_RE = re.compile(r"([0-9]+)([smhd])")
UNIT_SECONDS = {
    "s": 1,
    "m": 60,
    "h": 60 * 60,
    "d": 24 * 60 * 60,
}
# a zero interval still waits this long between runs
MIN_WAIT_SECONDS = 0.001


class BackupIntervalError(ValueError):
    """Raised for a backup interval that is not `<int><s|m|h|d>`."""


def parse_backup_interval(value: str) -> int:
    """Return the interval in seconds, e.g. "90s" -> 90, "2h" -> 7200."""
    match = INTERVAL_RE.fullmatch(value) if isinstance(value, str) else None
    if match is None:
        raise BackupIntervalError(f"invalid backup interval: {value!r}")
    return int(match.group(1)) * UNIT_SECONDS[match.group(2)]


def backup_file_name(now: datetime) -> str:
    # 2024-05-01T12:30:00.123Z -> backup-2024-05-01T12-30-00.123Z.json
    utc = now.astimezone(timezone.utc)
    stamp = utc.strftime("%Y-%m-%dT%H:%M:%S") + f".{utc.microsecond // 1000:03d}Z"
    return f"backup-{stamp.replace(':', '-')}.json"


def perform_backup(database: Database, backup_dir: Path, *, now: datetime | None = None) -> Path | None:
    """
    Write `database` to a new timestamped file under `backup_dir`.

    Returns the file path, or None when the write failed (the failure is logged).
    """
    backup_file = Path(backup_dir) / backup_file_name(now or datetime.now(timezone.utc))
    try:
        write_json(backup_file, database)
    except (OSError, TypeError, ValueError) as e:
        logger.error("BACKUP: failed to write %s: %r", backup_file, e)
        return None
    logger.info("BACKUP: wrote %s", backup_file)
    return backup_file


class BackupScheduler:
    """
    Snapshots a database to `backup_dir` every `interval_seconds` on a daemon thread.

    `snapshot` must return a consistent copy of the data; it is called from the
    scheduler thread. Files are never pruned.
    """

    def __init__(self, snapshot: Callable[[], Database], backup_dir: Path, interval_seconds: float):
        self._snapshot = snapshot
        self._backup_dir = Path(backup_dir)
        self._interval = interval_seconds
        self._stopped = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def interval_seconds(self) -> float:
        return self._interval

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self._thread is not None:
            return
        self._thread = threading.Thread(target=self._run, name="docstore-backup", daemon=True)
        self._thread.start()
        logger.info("BACKUP: every %ss into %s", self._interval, self._backup_dir)

    def stop(self, timeout: float | None = None) -> None:
        self._stopped.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)

    def run_once(self) -> Path | None:
        return perform_backup(self._snapshot(), self._backup_dir)

    def _run(self) -> None:
        while not self._stopped.wait(max(self._interval, MIN_WAIT_SECONDS)):
            try:
                self.run_once()
            except Exception:
                # keep the schedule alive; the next tick is independent
                logger.exception("BACKUP: run failed")
