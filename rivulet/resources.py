"""
Rivulet Resources - Live Subscription Counter
=============================================

While `trace_resources` is enabled, every subscription increments
`Resources.total` when it is created and decrements it exactly once when it
is released. A balanced count after a scenario proves that terminal events
and disposal tore everything down.

Example:
    ```python
    from rivulet import Observable, configured
    from rivulet.resources import Resources

    with configured(trace_resources=True):
        before = Resources.total
        Observable.of(1, 2, 3).take(2).subscribe(print)
        assert Resources.total == before
    ```
"""

import threading

from .config import get_config


class Resources:
    """Thread-safe counter of live subscriptions."""

    _lock = threading.Lock()
    total = 0

    @classmethod
    def increment(cls) -> bool:
        """Count a new subscription. Returns whether it was counted."""
        if not get_config().trace_resources:
            return False
        with cls._lock:
            cls.total += 1
        return True

    @classmethod
    def decrement(cls) -> None:
        with cls._lock:
            cls.total -= 1

    @classmethod
    def reset(cls) -> None:
        with cls._lock:
            cls.total = 0
