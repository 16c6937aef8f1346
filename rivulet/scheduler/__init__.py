"""Schedulers consumed by timed producers."""

from .timeout import TimeoutScheduler
from .virtual import ScheduledItem, VirtualTimeScheduler

__all__ = ["ScheduledItem", "TimeoutScheduler", "VirtualTimeScheduler"]
