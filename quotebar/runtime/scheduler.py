"""Periodic ticker driving the rotation controller.

The scheduler only decides *when* to call ``tick``; how far to advance after
a long pause is the rotation engine's job. It also notices when the machine
was suspended (the wall clock jumped much further than the monotonic clock
across one wait) and logs it, since that tick usually performs a multi-step
catch-up.
"""
from __future__ import annotations

import logging
import threading
import time
from typing import Callable

LOGGER = logging.getLogger(__name__)

DEFAULT_TICK_INTERVAL_SEC = 60.0
DEFAULT_WAKE_THRESHOLD_SEC = 120.0


class RotationScheduler:
    """Call ``tick`` every ``period_sec`` on a daemon thread or in the foreground."""

    def __init__(
        self,
        tick: Callable[[], object],
        *,
        period_sec: float = DEFAULT_TICK_INTERVAL_SEC,
        wake_threshold_sec: float = DEFAULT_WAKE_THRESHOLD_SEC,
        wall_clock: Callable[[], float] = time.time,
        monotonic_clock: Callable[[], float] = time.monotonic,
        logger: logging.Logger | None = None,
    ) -> None:
        if period_sec <= 0:
            raise ValueError("period_sec must be positive")
        self._tick = tick
        self._period = period_sec
        self._wake_threshold = wake_threshold_sec
        self._wall_clock = wall_clock
        self._monotonic = monotonic_clock
        self._logger = logger or LOGGER
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self._last_wall = wall_clock()
        self._last_mono = monotonic_clock()

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self) -> None:
        if self.running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self.run_forever, name="quotebar-scheduler", daemon=True)
        self._thread.start()
        self._logger.info("Scheduler started", extra={"period_sec": self._period})

    def stop(self, timeout: float | None = 5.0) -> None:
        self._stop_event.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
        self._thread = None

    def run_forever(self) -> None:
        """Tick until :meth:`stop` is called; also usable on the main thread."""

        self._reset_clocks()
        self.run_once()
        while not self._stop_event.wait(self._period):
            self.run_once()
        self._logger.info("Scheduler stopped")

    # ------------------------------------------------------------------
    # Single step
    # ------------------------------------------------------------------
    def run_once(self) -> bool:
        """Perform one tick; returns whether a suspension was detected first."""

        resumed = self._detect_resume()
        if resumed:
            self._logger.info("Resumed after suspension, catching up")
        try:
            self._tick()
        except Exception:
            self._logger.exception("Scheduled tick failed")
        return resumed

    def _detect_resume(self) -> bool:
        wall = self._wall_clock()
        mono = self._monotonic()
        drift = (wall - self._last_wall) - (mono - self._last_mono)
        self._last_wall = wall
        self._last_mono = mono
        return drift >= self._wake_threshold

    def _reset_clocks(self) -> None:
        self._last_wall = self._wall_clock()
        self._last_mono = self._monotonic()


__all__ = ["DEFAULT_TICK_INTERVAL_SEC", "DEFAULT_WAKE_THRESHOLD_SEC", "RotationScheduler"]
