"""Unit tests for the transformation operators."""

import pytest

from rivulet import Observable, PublishSubject
from rivulet.testing import record


@pytest.mark.unit
@pytest.mark.operators
def test_map_applies_the_function():
    """map transforms every element."""
    assert record(Observable.of(1, 2, 3).map(lambda n: n * 2)).values == [2, 4, 6]


@pytest.mark.unit
@pytest.mark.operators
def test_map_error_terminates_the_sequence():
    """An exception in the mapper becomes the Error event."""
    recorder = record(Observable.of(1, 0, 2).map(lambda n: 10 // n))

    assert recorder.values == [10]
    assert isinstance(recorder.error, ZeroDivisionError)


@pytest.mark.unit
@pytest.mark.operators
def test_enumerated_pairs_index_and_value():
    """enumerated yields (index, element) pairs."""
    recorder = record(Observable.of(1, 2, 3, 4, 5, 6).enumerated())

    assert recorder.values == [(0, 1), (1, 2), (2, 3), (3, 4), (4, 5), (5, 6)]


@pytest.mark.unit
@pytest.mark.operators
def test_enumerated_restarts_per_subscription():
    """The index belongs to the subscription, not the observable."""
    source = Observable.of("a", "b").enumerated()

    record(source)
    assert record(source).values == [(0, "a"), (1, "b")]


@pytest.mark.unit
@pytest.mark.operators
def test_compact_map_drops_none():
    """compact_map discards None results."""
    source = Observable.of("1", "x", "3")

    def parse(text):
        return int(text) if text.isdigit() else None

    assert record(source.compact_map(parse)).values == [1, 3]


@pytest.mark.unit
@pytest.mark.operators
def test_compact_map_defaults_to_identity():
    """Without a mapper, None elements are removed."""
    assert record(Observable.of(1, None, 2).compact_map()).values == [1, 2]


@pytest.mark.unit
@pytest.mark.operators
def test_scan_emits_running_total():
    """scan emits one accumulation per element."""
    source = Observable.of(1, 3, 5, 7, 9)

    recorder = record(source.scan(0, lambda total, n: total + n))

    assert recorder.describe() == [
        "next(1)",
        "next(4)",
        "next(9)",
        "next(16)",
        "next(25)",
        "completed",
    ]


@pytest.mark.unit
@pytest.mark.operators
def test_scan_state_is_per_subscription():
    """Two subscriptions accumulate independently."""
    source = Observable.of(1, 2).scan(0, lambda total, n: total + n)

    assert record(source).values == [1, 3]
    assert record(source).values == [1, 3]


@pytest.mark.unit
@pytest.mark.operators
def test_reduce_emits_once_on_completion():
    """reduce emits only the final accumulation."""
    source = Observable.of(1, 3, 5, 7, 9)

    recorder = record(source.reduce(0, lambda total, n: total + n))

    assert recorder.describe() == ["next(25)", "completed"]


@pytest.mark.unit
@pytest.mark.operators
def test_reduce_on_unfinished_source_emits_nothing():
    """Without completion reduce stays silent."""
    subject = PublishSubject()
    recorder = record(subject.reduce(0, lambda total, n: total + n))

    subject.on_next(1)
    subject.on_next(2)

    assert recorder.events == []


@pytest.mark.unit
@pytest.mark.operators
def test_reduce_result_selector_shapes_the_result():
    """result_selector maps the final accumulation."""
    source = Observable.of(1, 2, 3)

    recorder = record(source.reduce(0, lambda total, n: total + n, lambda total: total / 3))

    assert recorder.values == [2.0]


@pytest.mark.unit
@pytest.mark.operators
def test_reduce_accumulator_error_terminates():
    """An accumulator that raises ends the sequence with the error."""

    def accumulate(total, n):
        if n == 2:
            raise ArithmeticError("overflow")
        return total + n

    recorder = record(Observable.of(1, 2, 3).reduce(0, accumulate))

    assert recorder.values == []
    assert isinstance(recorder.error, ArithmeticError)
