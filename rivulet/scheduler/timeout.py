"""
Rivulet TimeoutScheduler - Real Time on Daemon Timers
=====================================================

Fires actions on `threading.Timer` daemon threads. Each firing happens on
its own timer thread; operators downstream serialize delivery per
subscription, so observers never see two concurrent calls.
"""

import logging
import threading
import time
from typing import Callable

from ..disposable import Disposable, SerialDisposable

logger = logging.getLogger(__name__)


class TimeoutScheduler:
    """Scheduler backed by wall-clock timers."""

    @property
    def now(self) -> float:
        return time.monotonic()

    def schedule(self, action: Callable[[], None]) -> Disposable:
        return self.schedule_relative(0.0, action)

    def schedule_relative(self, duetime: float, action: Callable[[], None]) -> Disposable:
        if duetime < 0:
            raise ValueError(f"duetime must be non-negative, got {duetime}")
        cancelled = threading.Event()

        def fire() -> None:
            if cancelled.is_set():
                return
            try:
                action()
            except Exception:
                logger.exception("Scheduled action failed")

        timer = threading.Timer(duetime, fire)
        timer.daemon = True
        timer.start()

        def cancel() -> None:
            cancelled.set()
            timer.cancel()

        return Disposable(cancel)

    def schedule_periodic(self, period: float, action: Callable[[], None]) -> SerialDisposable:
        if period <= 0:
            raise ValueError(f"period must be positive, got {period}")
        serial = SerialDisposable()

        def run() -> None:
            try:
                action()
            finally:
                if not serial.is_disposed:
                    serial.disposable = self.schedule_relative(period, run)

        serial.disposable = self.schedule_relative(period, run)
        return serial
