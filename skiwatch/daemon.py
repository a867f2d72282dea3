"""Refresh daemon: runs the refresh pipeline on a fixed interval.

Each cycle replaces the previous FleetResult wholesale; readers holding
the old snapshot keep a valid (if outdated) view. ``stop()`` is the
cancellation handle: it ends the wait between cycles, but never aborts
a cycle that is already fetching.

Usage:
    skiwatch watch                 # every 30 minutes (default)
    skiwatch watch --interval 300  # every 5 minutes
"""

import logging
import signal
import threading
import time
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path

from skiwatch.config.loader import config_hash
from skiwatch.config.schema import SkiwatchConfig
from skiwatch.models.fleet import FleetResult
from skiwatch.pipeline.refresh_pipeline import CycleOutcome, RefreshPipeline

logger = logging.getLogger(__name__)

LOG_DIR = Path("logs")
MAX_LOG_FILES = 100  # Keep last 100 cycle logs


class RefreshDaemon:
    """Runs refresh cycles in a loop until stopped."""

    def __init__(
        self,
        config: SkiwatchConfig,
        interval: int | None = None,
        pipeline: RefreshPipeline | None = None,
        on_cycle: Callable[[CycleOutcome], None] | None = None,
        max_cycles: int | None = None,
    ):
        self.config = config
        self.interval = (
            interval if interval is not None else config.ops.refresh_interval_minutes * 60
        )
        self.pipeline = pipeline or RefreshPipeline(config)
        self.on_cycle = on_cycle
        self.max_cycles = max_cycles
        self._stop = threading.Event()
        self._latest: FleetResult | None = None
        self._total_cycles = 0
        self._total_failures = 0

    @property
    def latest(self) -> FleetResult | None:
        """Most recent complete FleetResult, or None before the first cycle."""
        return self._latest

    @property
    def stopped(self) -> bool:
        return self._stop.is_set()

    def stop(self) -> None:
        self._stop.set()

    def start(self, install_signals: bool = True) -> None:
        """Run the loop in the calling thread until stop() or a signal."""
        if install_signals:
            self._setup_signals()
        logger.info(
            "Refresh daemon started, interval=%ds config=%s",
            self.interval, config_hash(self.config),
        )
        try:
            self._loop()
        except KeyboardInterrupt:
            logger.info("Daemon interrupted by keyboard")
        finally:
            logger.info(
                "Daemon stopped, %d cycles (%d with failures)",
                self._total_cycles, self._total_failures,
            )

    def start_background(self) -> threading.Thread:
        thread = threading.Thread(
            target=self.start, kwargs={"install_signals": False}, daemon=True
        )
        thread.start()
        return thread

    def _loop(self) -> None:
        while not self._stop.is_set():
            cycle_start = time.monotonic()
            self.run_one_cycle()

            if self.max_cycles is not None and self._total_cycles >= self.max_cycles:
                break

            elapsed = time.monotonic() - cycle_start
            self._stop.wait(max(0.0, self.interval - elapsed))

    def run_one_cycle(self) -> CycleOutcome | None:
        """Execute a single cycle with its own log file. Returns None if it crashed."""
        self._total_cycles += 1
        timestamp = datetime.now(UTC).strftime("%Y%m%dT%H%M%SZ")

        LOG_DIR.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(LOG_DIR / f"refresh_{timestamp}.log")
        file_handler.setLevel(logging.INFO)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        root_logger = logging.getLogger()
        root_logger.addHandler(file_handler)

        try:
            logger.info("=== Cycle #%d starting ===", self._total_cycles)
            outcome = self.pipeline.run()
            self._latest = outcome.fleet
            if outcome.summary.locations_failed:
                self._total_failures += 1
                logger.warning(
                    "Cycle #%d: %d location(s) failed",
                    self._total_cycles, outcome.summary.locations_failed,
                )
            if self.on_cycle is not None:
                self.on_cycle(outcome)
            return outcome
        except Exception:
            self._total_failures += 1
            logger.exception("Cycle #%d crashed", self._total_cycles)
            return None
        finally:
            root_logger.removeHandler(file_handler)
            file_handler.close()
            self._rotate_logs()

    def _rotate_logs(self) -> None:
        """Keep only the most recent log files."""
        if not LOG_DIR.exists():
            return
        logs = sorted(LOG_DIR.glob("refresh_*.log"))
        if len(logs) > MAX_LOG_FILES:
            for old in logs[: len(logs) - MAX_LOG_FILES]:
                old.unlink(missing_ok=True)

    def _setup_signals(self) -> None:
        """Handle SIGTERM and SIGINT for graceful shutdown."""
        def _stop(signum: int, frame: object) -> None:
            logger.info("Received %s, shutting down", signal.Signals(signum).name)
            self.stop()

        signal.signal(signal.SIGTERM, _stop)
        signal.signal(signal.SIGINT, _stop)
