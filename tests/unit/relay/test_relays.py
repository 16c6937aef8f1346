"""Unit tests for relays."""

import pytest

from rivulet import BehaviorRelay, Observable, PublishRelay, Relay, SubjectDisposedError
from rivulet.testing import record


@pytest.mark.unit
@pytest.mark.subject
def test_publish_relay_forwards_accepted_values():
    """accept() reaches current observers only."""
    relay = Relay.publish()
    relay.accept("before")
    recorder = record(relay)

    relay.accept("🐶")
    relay.accept("🐱")

    assert recorder.values == ["🐶", "🐱"]
    assert not recorder.is_terminated


@pytest.mark.unit
@pytest.mark.subject
def test_relay_has_no_terminal_inputs():
    """A relay cannot be completed or failed."""
    relay = PublishRelay()

    assert not hasattr(relay, "on_completed")
    assert not hasattr(relay, "on_error")


@pytest.mark.unit
@pytest.mark.subject
def test_behavior_relay_replays_and_exposes_value():
    """BehaviorRelay replays its current value and exposes it."""
    relay = Relay.behavior(1)
    relay.accept(2)

    assert record(relay).values == [2]
    assert relay.value == 2


@pytest.mark.unit
@pytest.mark.subject
def test_relay_can_be_fed_from_an_observable():
    """Binding a finite observable through accept never completes the relay."""
    relay = BehaviorRelay(0)
    recorder = record(relay)

    Observable.of(1, 2).subscribe(relay.accept)

    assert recorder.values == [0, 1, 2]
    assert not recorder.is_terminated


@pytest.mark.unit
@pytest.mark.subject
def test_disposed_relay_follows_subject_rules():
    """A late observer of a disposed relay receives SubjectDisposedError."""
    relay = PublishRelay()
    relay.dispose()

    recorder = record(relay)

    assert relay.is_disposed
    assert isinstance(recorder.error, SubjectDisposedError)
