"""
Rivulet DisposeBag - Scoped Ownership of Subscriptions
======================================================

A `DisposeBag` collects the disposables created over the lifetime of some
owner (a view model, a test, a `with` block) and releases them all when the
owner goes away.

Example:
    ```python
    from rivulet import DisposeBag, Observable

    with DisposeBag() as bag:
        Observable.never().subscribe(print).disposed_by(bag)
    # every subscription added to the bag is disposed here
    ```
"""

from .disposable import CompositeDisposable


class DisposeBag(CompositeDisposable):
    """
    Owner of a group of disposables.

    Disposing the bag releases every member exactly once, even if one of
    them fails; failures are logged. A disposable added to a bag that has
    already been released is disposed immediately.
    """

    __slots__ = ()

    def insert(self, disposable) -> None:
        """Alias of `add`, mirroring `disposable.disposed_by(bag)`."""
        self.add(disposable)

    def __enter__(self) -> "DisposeBag":
        return self

    def __repr__(self) -> str:
        state = "disposed" if self.is_disposed else f"{len(self)} members"
        return f"DisposeBag({state})"
