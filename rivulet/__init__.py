"""
Rivulet - Reactive Event Streams

A small reactive-stream runtime: cold observables, the subject and relay
families, deterministic disposal, and the classic operator set (merge,
concat, combine_latest, zip, switch_latest, flat_map, scan/reduce,
materialize, the take/skip family and more).
"""

# Events and the exceptions the runtime reports
from .errors import (
    ArgumentOutOfRangeError,
    RivuletError,
    SequenceContainsMoreThanOneElementError,
    SequenceContainsNoElementsError,
    SubjectDisposedError,
)
from .event import Completed, Error, Event, EventKind, Next

# Configuration
from .config import RivuletConfig, configure, configured, get_config, load_config_from_env

# Resource ownership
from .disposable import (
    CompositeDisposable,
    Disposable,
    DisposeBag,
    SerialDisposable,
    SingleAssignmentDisposable,
)

# Observer side
from .observer import AnonymousObserver, AutoDetachObserver, ObserverBase

# Observable core
from .observable import Observable

# Operators available as plain functions
from .operators import TakeBehavior, amb, combine_latest, concat, merge
from .operators import zip_ as zip

# Multicast
from .relay import BehaviorRelay, PublishRelay, Relay
from .subject import AsyncSubject, BehaviorSubject, PublishSubject, ReplaySubject, Subject

# Traits and schedulers
from .scheduler import TimeoutScheduler, VirtualTimeScheduler
from .traits import Completable, Maybe, Single

__all__ = [
    # Core
    "Observable",
    "Event",
    "EventKind",
    "Next",
    "Error",
    "Completed",
    # Observers
    "AnonymousObserver",
    "AutoDetachObserver",
    "ObserverBase",
    # Subjects and relays
    "Subject",
    "PublishSubject",
    "BehaviorSubject",
    "ReplaySubject",
    "AsyncSubject",
    "Relay",
    "PublishRelay",
    "BehaviorRelay",
    # Disposables
    "Disposable",
    "DisposeBag",
    "CompositeDisposable",
    "SerialDisposable",
    "SingleAssignmentDisposable",
    # Combinators
    "merge",
    "concat",
    "combine_latest",
    "zip",
    "amb",
    "TakeBehavior",
    # Traits
    "Single",
    "Maybe",
    "Completable",
    # Schedulers
    "VirtualTimeScheduler",
    "TimeoutScheduler",
    # Configuration
    "RivuletConfig",
    "get_config",
    "configure",
    "configured",
    "load_config_from_env",
    # Errors
    "RivuletError",
    "SubjectDisposedError",
    "ArgumentOutOfRangeError",
    "SequenceContainsNoElementsError",
    "SequenceContainsMoreThanOneElementError",
]
