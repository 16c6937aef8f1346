"""Relays: non-terminating wrappers over subjects."""

from .relay import BehaviorRelay, PublishRelay, Relay

__all__ = ["BehaviorRelay", "PublishRelay", "Relay"]
