"""Subjects: observers that multicast to every attached observer."""

from .async_subject import AsyncSubject
from .base import SubjectBase
from .behavior import BehaviorSubject
from .publish import PublishSubject
from .replay import ReplaySubject
from .subject import Subject

__all__ = [
    "AsyncSubject",
    "BehaviorSubject",
    "PublishSubject",
    "ReplaySubject",
    "Subject",
    "SubjectBase",
]
