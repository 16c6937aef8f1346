"""Unit tests for the flattening operators."""

import pytest

from rivulet import ArgumentOutOfRangeError, BehaviorSubject, Observable, PublishSubject
from rivulet.testing import record


class Student:
    def __init__(self, score):
        self.score = BehaviorSubject(score)


@pytest.mark.unit
@pytest.mark.operators
def test_flat_map_follows_every_inner_sequence():
    """flat_map relays updates from all inner observables."""
    laura, charlotte = Student(80), Student(90)
    students = PublishSubject()
    recorder = record(students.flat_map(lambda student: student.score))

    students.on_next(laura)
    laura.score.on_next(85)
    students.on_next(charlotte)
    laura.score.on_next(95)
    charlotte.score.on_next(100)

    assert recorder.values == [80, 85, 90, 95, 100]


@pytest.mark.unit
@pytest.mark.operators
def test_flat_map_latest_switches_to_newest_inner():
    """flat_map_latest ignores inner sequences that were switched away from."""
    laura, charlotte = Student(80), Student(90)
    students = PublishSubject()
    recorder = record(students.flat_map_latest(lambda student: student.score))

    students.on_next(laura)
    laura.score.on_next(85)
    students.on_next(charlotte)
    laura.score.on_next(95)
    charlotte.score.on_next(100)

    assert recorder.values == [80, 85, 90, 100]
    assert not laura.score.has_observers


@pytest.mark.unit
@pytest.mark.operators
def test_merge_all_completes_after_outer_and_inners():
    """Completion requires the outer and every inner sequence to complete."""
    outer, first, second = PublishSubject(), PublishSubject(), PublishSubject()
    recorder = record(outer.merge_all())

    outer.on_next(first)
    outer.on_next(second)
    outer.on_completed()
    first.on_next(1)
    first.on_completed()
    assert not recorder.is_completed

    second.on_next(2)
    second.on_completed()

    assert recorder.describe() == ["next(1)", "next(2)", "completed"]


@pytest.mark.unit
@pytest.mark.operators
def test_merge_all_inner_error_releases_everything():
    """An inner error is forwarded at once and all subscriptions are released."""
    outer, first, second = PublishSubject(), PublishSubject(), PublishSubject()
    recorder = record(outer.merge_all())
    outer.on_next(first)
    outer.on_next(second)

    first.on_error(RuntimeError("inner failed"))
    second.on_next("late")

    assert isinstance(recorder.error, RuntimeError)
    assert recorder.values == []
    assert not outer.has_observers
    assert not second.has_observers


@pytest.mark.unit
@pytest.mark.operators
def test_merge_all_max_concurrent_queues_extra_sources():
    """Sources beyond the limit wait until an active one completes."""
    outer = PublishSubject()
    first, second, third = PublishSubject(), PublishSubject(), PublishSubject()
    recorder = record(outer.merge_all(max_concurrent=2))

    outer.on_next(first)
    outer.on_next(second)
    outer.on_next(third)
    third.on_next("dropped, not yet subscribed")
    first.on_next("a")
    first.on_completed()
    third.on_next("c")
    second.on_next("b")

    assert recorder.values == ["a", "c", "b"]


@pytest.mark.unit
@pytest.mark.operators
def test_merge_all_rejects_non_positive_limit():
    """max_concurrent must be positive."""
    with pytest.raises(ArgumentOutOfRangeError):
        Observable.never().merge_all(max_concurrent=0)


@pytest.mark.unit
@pytest.mark.operators
def test_concat_all_runs_inners_in_order():
    """concat_all subscribes to the next inner only after the previous completed."""
    outer = Observable.of(Observable.of(1, 2), Observable.of(3), Observable.empty())

    assert record(outer.concat_all()).describe() == [
        "next(1)",
        "next(2)",
        "next(3)",
        "completed",
    ]


@pytest.mark.unit
@pytest.mark.operators
def test_concat_all_drains_a_long_queue_of_synchronous_inners():
    """Hundreds of queued inners that complete on subscribe run one after another."""
    outer, gate = PublishSubject(), PublishSubject()
    recorder = record(outer.concat_all())

    outer.on_next(gate)
    for value in range(500):
        outer.on_next(Observable.just(value))
    outer.on_completed()
    gate.on_completed()

    assert recorder.values == list(range(500))
    assert recorder.is_completed


@pytest.mark.unit
@pytest.mark.operators
def test_concat_map_over_a_long_synchronous_source():
    """concat_map handles a long run of inners that each complete immediately."""
    recorder = record(Observable.range(0, 500).concat_map(Observable.just))

    assert recorder.values == list(range(500))
    assert recorder.is_completed


@pytest.mark.unit
@pytest.mark.operators
def test_concat_map_keeps_order_with_hot_inners():
    """concat_map waits for each inner sequence before starting the next."""
    sequences = {
        "German cities": PublishSubject(),
        "Spanish cities": PublishSubject(),
    }
    countries = PublishSubject()
    recorder = record(countries.concat_map(lambda country: sequences[country]))

    countries.on_next("German cities")
    countries.on_next("Spanish cities")
    sequences["Spanish cities"].on_next("Madrid")
    sequences["German cities"].on_next("Berlin")
    sequences["German cities"].on_completed()
    sequences["Spanish cities"].on_next("Barcelona")

    assert recorder.values == ["Berlin", "Barcelona"]


@pytest.mark.unit
@pytest.mark.operators
def test_switch_latest_relays_only_current_inner():
    """switch_latest drops events from superseded inner sequences."""
    one, two, three = PublishSubject(), PublishSubject(), PublishSubject()
    source = PublishSubject()
    recorder = record(source.switch_latest())

    source.on_next(one)
    one.on_next("Some text from sequence one")
    two.on_next("Some text from sequence two")
    source.on_next(two)
    two.on_next("More text from sequence two")
    one.on_next("and also from sequence one")
    source.on_next(three)
    two.on_next("Why don't you see me?")
    one.on_next("I'm alone, help me")
    three.on_next("Hey it's three. I win.")
    source.on_next(one)
    one.on_next("Nope. It's me, one!")

    assert recorder.values == [
        "Some text from sequence one",
        "More text from sequence two",
        "Hey it's three. I win.",
        "Nope. It's me, one!",
    ]


@pytest.mark.unit
@pytest.mark.operators
def test_switch_latest_completes_after_outer_and_current_inner():
    """Completion waits for the current inner to finish."""
    inner, source = PublishSubject(), PublishSubject()
    recorder = record(source.switch_latest())

    source.on_next(inner)
    source.on_completed()
    assert not recorder.is_completed

    inner.on_completed()
    assert recorder.is_completed


@pytest.mark.unit
@pytest.mark.operators
def test_flat_map_selector_error_terminates():
    """A selector that raises ends the sequence."""

    def selector(value):
        raise LookupError(value)

    recorder = record(Observable.of(1).flat_map(selector))

    assert isinstance(recorder.error, LookupError)
