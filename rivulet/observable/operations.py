"""
Rivulet Operations - Fluent Operator Methods
============================================

`OperatorMixin` gives `Observable` its chainable methods. Each method is a
thin wrapper over the plain function in `rivulet.operators`, imported lazily
so that the operator modules can themselves depend on `Observable`.

Example:
    ```python
    Observable.of(1, 2, 3, 4, 5).filter(lambda n: n % 2).map(str)
    ```

Groups:
- Transforming: `map`, `enumerated`, `compact_map`, `scan`, `reduce`,
  `to_array`, `flat_map`, `flat_map_latest`, `concat_map`
- Filtering: `filter`, `take`, `take_while`, `take_until`, `skip`,
  `skip_while`, `skip_until`, `element_at`, `distinct_until_changed`,
  `ignore_elements`
- Combining: `start_with`, `merge`, `merge_all`, `concat`, `concat_all`,
  `switch_latest`, `combine_latest`, `zip`, `with_latest_from`, `sample`,
  `amb`
- Events and side effects: `materialize`, `dematerialize`, `do`, `debug`
- Traits: `as_single`, `as_maybe`, `as_completable`
"""

from typing import TYPE_CHECKING, Any, Callable, Optional, TypeVar

if TYPE_CHECKING:
    from ..traits import Completable, Maybe, Single
    from .observable import Observable

T = TypeVar("T")
U = TypeVar("U")


class OperatorMixin:
    """Chainable operator methods shared by every observable."""

    # ------------------------------------------------------------------
    # Transforming
    # ------------------------------------------------------------------

    def map(self, mapper: Callable[[Any], U]) -> "Observable[U]":
        from ..operators import map_

        return map_(self, mapper)

    def enumerated(self) -> "Observable":
        from ..operators import enumerated

        return enumerated(self)

    def compact_map(self, mapper: Optional[Callable[[Any], Any]] = None) -> "Observable":
        from ..operators import compact_map

        return compact_map(self, mapper)

    def scan(self, seed: Any, accumulator: Callable[[Any, Any], Any]) -> "Observable":
        from ..operators import scan

        return scan(self, seed, accumulator)

    def reduce(
        self,
        seed: Any,
        accumulator: Callable[[Any, Any], Any],
        result_selector: Optional[Callable[[Any], Any]] = None,
    ) -> "Observable":
        from ..operators import reduce

        return reduce(self, seed, accumulator, result_selector)

    def to_array(self) -> "Single":
        """Collect every element into a list, delivered as a `Single`."""
        from ..operators import to_list
        from ..traits import Single

        return Single(to_list(self))

    def flat_map(self, selector: Callable[[Any], "Observable"]) -> "Observable":
        from ..operators import flat_map

        return flat_map(self, selector)

    def flat_map_latest(self, selector: Callable[[Any], "Observable"]) -> "Observable":
        from ..operators import flat_map_latest

        return flat_map_latest(self, selector)

    def concat_map(self, selector: Callable[[Any], "Observable"]) -> "Observable":
        from ..operators import concat_map

        return concat_map(self, selector)

    # ------------------------------------------------------------------
    # Filtering
    # ------------------------------------------------------------------

    def filter(self, predicate: Callable[[Any], bool]) -> "Observable":
        from ..operators import filter_

        return filter_(self, predicate)

    def take(self, count: int) -> "Observable":
        from ..operators import take

        return take(self, count)

    def take_while(
        self, predicate: Callable[[Any], bool], inclusive: bool = False
    ) -> "Observable":
        from ..operators import take_while

        return take_while(self, predicate, inclusive)

    def take_until(self, other: Any, behavior: Any = None) -> "Observable":
        """
        Emit elements until `other` says stop, then complete.

        Args:
            other: Either an observable, whose first element stops the
                   sequence, or a predicate evaluated on every element
            behavior: `TakeBehavior` for the predicate form; EXCLUSIVE by
                      default
        """
        from ..operators import TakeBehavior, take_until, take_until_trigger

        if hasattr(other, "subscribe"):
            if behavior is not None:
                raise TypeError("behavior only applies to the predicate form of take_until")
            return take_until_trigger(self, other)
        return take_until(self, other, behavior or TakeBehavior.EXCLUSIVE)

    def skip(self, count: int) -> "Observable":
        from ..operators import skip

        return skip(self, count)

    def skip_while(self, predicate: Callable[[Any], bool]) -> "Observable":
        from ..operators import skip_while

        return skip_while(self, predicate)

    def skip_until(self, trigger: "Observable") -> "Observable":
        from ..operators import skip_until

        return skip_until(self, trigger)

    def element_at(self, index: int) -> "Observable":
        from ..operators import element_at

        return element_at(self, index)

    def distinct_until_changed(
        self,
        comparer: Optional[Callable[[Any, Any], bool]] = None,
        key_selector: Optional[Callable[[Any], Any]] = None,
    ) -> "Observable":
        from ..operators import distinct_until_changed

        return distinct_until_changed(self, comparer, key_selector)

    def ignore_elements(self) -> "Completable":
        from ..operators import ignore_elements
        from ..traits import Completable

        return Completable(ignore_elements(self))

    # ------------------------------------------------------------------
    # Combining
    # ------------------------------------------------------------------

    def start_with(self, *values: Any) -> "Observable":
        from ..operators import start_with

        return start_with(self, *values)

    def merge(self, *others: "Observable", max_concurrent: Optional[int] = None) -> "Observable":
        from ..operators import merge

        return merge(self, *others, max_concurrent=max_concurrent)

    def merge_all(self, max_concurrent: Optional[int] = None) -> "Observable":
        from ..operators import merge_all

        return merge_all(self, max_concurrent)

    def concat(self, *others: "Observable") -> "Observable":
        from ..operators import concat

        return concat(self, *others)

    def concat_all(self) -> "Observable":
        from ..operators import concat_all

        return concat_all(self)

    def switch_latest(self) -> "Observable":
        from ..operators import switch_latest

        return switch_latest(self)

    def combine_latest(
        self, *others: "Observable", result_selector: Optional[Callable[..., Any]] = None
    ) -> "Observable":
        from ..operators import combine_latest

        return combine_latest(self, *others, result_selector=result_selector)

    def zip(
        self, *others: "Observable", result_selector: Optional[Callable[..., Any]] = None
    ) -> "Observable":
        from ..operators import zip_

        return zip_(self, *others, result_selector=result_selector)

    def with_latest_from(
        self, other: "Observable", result_selector: Optional[Callable[[Any, Any], Any]] = None
    ) -> "Observable":
        from ..operators import with_latest_from

        return with_latest_from(self, other, result_selector)

    def sample(self, trigger: "Observable") -> "Observable":
        from ..operators import sample

        return sample(self, trigger)

    def amb(self, *others: "Observable") -> "Observable":
        from ..operators import amb

        return amb(self, *others)

    # ------------------------------------------------------------------
    # Events and side effects
    # ------------------------------------------------------------------

    def materialize(self) -> "Observable":
        from ..operators import materialize

        return materialize(self)

    def dematerialize(self) -> "Observable":
        from ..operators import dematerialize

        return dematerialize(self)

    def do(self, **callbacks: Optional[Callable[..., None]]) -> "Observable":
        """
        Attach side effects; see `rivulet.operators.do` for the callback names.

        Example:
            ```python
            source.do(on_next=print, on_dispose=lambda: print("released"))
            ```
        """
        from ..operators import do

        return do(self, **callbacks)

    def debug(self, identifier: Optional[str] = None) -> "Observable":
        from ..operators import debug

        return debug(self, identifier)

    # ------------------------------------------------------------------
    # Traits
    # ------------------------------------------------------------------

    def as_single(self) -> "Single":
        from ..traits import Single, single_from

        return Single(single_from(self))

    def as_maybe(self) -> "Maybe":
        from ..traits import Maybe, maybe_from

        return Maybe(maybe_from(self))

    def as_completable(self) -> "Completable":
        return self.ignore_elements()
