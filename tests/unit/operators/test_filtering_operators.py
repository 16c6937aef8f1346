"""Unit tests for the filtering and slicing operators."""

import pytest

from rivulet import ArgumentOutOfRangeError, Observable, PublishSubject, TakeBehavior
from rivulet.testing import record


@pytest.mark.unit
@pytest.mark.operators
def test_filter_keeps_matching_elements():
    """filter passes only elements satisfying the predicate."""
    source = Observable.of(1, 2, 3, 4, 5, 6, 7, 8, 9, 10)

    assert record(source.filter(lambda n: n % 2 == 0)).values == [2, 4, 6, 8, 10]


@pytest.mark.unit
@pytest.mark.operators
def test_filter_predicate_error_terminates():
    """A predicate that raises ends the sequence with that error."""

    def predicate(value):
        if value == 2:
            raise ValueError("bad element")
        return True

    recorder = record(Observable.of(1, 2, 3).filter(predicate))

    assert recorder.values == [1]
    assert isinstance(recorder.error, ValueError)


@pytest.mark.unit
@pytest.mark.operators
def test_skip_drops_first_elements():
    """skip(n) ignores the first n elements."""
    source = Observable.of("🐶", "🐱", "🐭", "🐹", "🐰", "🦊")

    assert record(source.skip(2)).values == ["🐭", "🐹", "🐰", "🦊"]


@pytest.mark.unit
@pytest.mark.operators
def test_skip_and_take_reject_negative_counts():
    """Negative counts are rejected eagerly."""
    with pytest.raises(ArgumentOutOfRangeError):
        Observable.of(1).skip(-1)
    with pytest.raises(ArgumentOutOfRangeError):
        Observable.of(1).take(-1)


@pytest.mark.unit
@pytest.mark.operators
def test_skip_while_skips_until_first_failure():
    """Once the predicate fails, everything passes."""
    source = Observable.of(1, 2, 3, 4, 5, 6, 1)

    assert record(source.skip_while(lambda n: n < 4)).values == [4, 5, 6, 1]


@pytest.mark.unit
@pytest.mark.operators
def test_skip_until_waits_for_trigger():
    """Elements before the trigger fires are dropped."""
    source, trigger = PublishSubject(), PublishSubject()
    recorder = record(source.skip_until(trigger))

    source.on_next("🔴")
    source.on_next("🔴")
    trigger.on_next("🔴")
    source.on_next("🍐")
    trigger.on_next("again")
    source.on_next("🍊")

    assert recorder.values == ["🍐", "🍊"]
    assert not trigger.has_observers


@pytest.mark.unit
@pytest.mark.operators
def test_take_completes_and_releases_upstream():
    """take(n) completes after n elements and detaches from its source."""
    source = PublishSubject()
    recorder = record(source.take(2))

    source.on_next(1)
    source.on_next(2)

    assert recorder.describe() == ["next(1)", "next(2)", "completed"]
    assert not source.has_observers


@pytest.mark.unit
@pytest.mark.operators
def test_take_zero_completes_immediately():
    """take(0) never subscribes to the source."""
    assert record(Observable.never().take(0)).describe() == ["completed"]


@pytest.mark.unit
@pytest.mark.operators
def test_take_while_stops_at_first_failure():
    """take_while completes at the first element failing the predicate."""
    source = Observable.of(1, 2, 3, 4, 5, 6)

    assert record(source.take_while(lambda n: n < 4)).describe() == [
        "next(1)",
        "next(2)",
        "next(3)",
        "completed",
    ]


@pytest.mark.unit
@pytest.mark.operators
def test_take_while_inclusive_emits_the_failing_element():
    """inclusive=True includes the element that ended the sequence."""
    source = Observable.of(1, 2, 3, 4, 5, 6)

    assert record(source.take_while(lambda n: n < 4, inclusive=True)).values == [
        1,
        2,
        3,
        4,
    ]


@pytest.mark.unit
@pytest.mark.operators
def test_take_until_predicate_inclusive():
    """The inclusive predicate form emits the matching element, then completes."""
    source = Observable.of(1, 2, 3, 4, 5)

    recorder = record(source.take_until(lambda n: n % 4 == 0, TakeBehavior.INCLUSIVE))

    assert recorder.describe() == [
        "next(1)",
        "next(2)",
        "next(3)",
        "next(4)",
        "completed",
    ]


@pytest.mark.unit
@pytest.mark.operators
def test_take_until_predicate_exclusive_by_default():
    """Without a behavior the matching element is dropped."""
    source = Observable.of(1, 2, 3, 4, 5)

    assert record(source.take_until(lambda n: n % 4 == 0)).values == [1, 2, 3]


@pytest.mark.unit
@pytest.mark.operators
def test_take_until_trigger_completes_on_first_signal():
    """The trigger form completes as soon as the trigger emits."""
    source, trigger = PublishSubject(), PublishSubject()
    recorder = record(source.take_until(trigger))

    source.on_next("🔴")
    source.on_next("🔴")
    trigger.on_next("🔴")
    source.on_next("🔴")

    assert recorder.describe() == ["next(🔴)", "next(🔴)", "completed"]
    assert not source.has_observers
    assert not trigger.has_observers


@pytest.mark.unit
@pytest.mark.operators
def test_take_until_trigger_ignores_trigger_completion():
    """A trigger completing without emitting changes nothing."""
    source, trigger = PublishSubject(), PublishSubject()
    recorder = record(source.take_until(trigger))

    trigger.on_completed()
    source.on_next(1)

    assert recorder.values == [1]
    assert not recorder.is_terminated


@pytest.mark.unit
@pytest.mark.operators
def test_take_until_rejects_behavior_with_a_trigger():
    """behavior only applies to the predicate form."""
    with pytest.raises(TypeError):
        Observable.of(1).take_until(PublishSubject(), TakeBehavior.INCLUSIVE)


@pytest.mark.unit
@pytest.mark.operators
def test_element_at_emits_one_element():
    """element_at(n) emits the n-th element and completes."""
    source = Observable.of("🐸", "🐷", "🐵", "🐔", "🐮")

    assert record(source.element_at(3)).describe() == ["next(🐔)", "completed"]


@pytest.mark.unit
@pytest.mark.operators
def test_element_at_past_the_end_errors():
    """A source completing before the index fails with ArgumentOutOfRangeError."""
    recorder = record(Observable.of(1, 2).element_at(5))

    assert isinstance(recorder.error, ArgumentOutOfRangeError)


@pytest.mark.unit
@pytest.mark.operators
def test_distinct_until_changed_drops_consecutive_duplicates():
    """Only changes are emitted."""
    source = Observable.of("🐱", "🐷", "🐱", "🐱", "🐱", "🐵", "🐱")

    assert record(source.distinct_until_changed()).values == [
        "🐱",
        "🐷",
        "🐱",
        "🐵",
        "🐱",
    ]


@pytest.mark.unit
@pytest.mark.operators
def test_distinct_until_changed_with_comparer():
    """A custom comparer decides what counts as a change."""
    source = Observable.of(10, 20, 200)

    def same_digit_count(a, b):
        return len(str(a)) == len(str(b))

    assert record(source.distinct_until_changed(same_digit_count)).values == [10, 200]


@pytest.mark.unit
@pytest.mark.operators
def test_distinct_until_changed_with_key_selector():
    """Keys are compared instead of the elements themselves."""
    source = Observable.of("apple", "avocado", "banana", "blueberry", "cherry")

    recorder = record(source.distinct_until_changed(key_selector=lambda s: s[0]))

    assert recorder.values == ["apple", "banana", "cherry"]


@pytest.mark.unit
@pytest.mark.operators
def test_ignore_elements_keeps_only_terminal():
    """ignore_elements passes the terminal event only."""
    subject = PublishSubject()
    recorder = record(subject.ignore_elements().as_observable())

    subject.on_next("X")
    subject.on_completed()

    assert recorder.describe() == ["completed"]
