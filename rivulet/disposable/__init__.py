"""Disposables and the DisposeBag."""

from .bag import DisposeBag
from .disposable import (
    CompositeDisposable,
    Disposable,
    SerialDisposable,
    SingleAssignmentDisposable,
    dispose_quietly,
)

__all__ = [
    "CompositeDisposable",
    "Disposable",
    "DisposeBag",
    "SerialDisposable",
    "SingleAssignmentDisposable",
    "dispose_quietly",
]
