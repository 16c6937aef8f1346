"""
Test utilities for rivulet.

This package contains shared testing utilities to help write
better, more maintainable tests.
"""

from .memory_utils import (
    SubscriptionTracker,
    assert_cleaned_up,
    assert_no_object_leak,
    count_types,
    with_subscription_tracking,
)

__all__ = [
    "assert_cleaned_up",
    "assert_no_object_leak",
    "count_types",
    "SubscriptionTracker",
    "with_subscription_tracking",
]
