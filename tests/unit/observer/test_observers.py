"""Unit tests for observers and the auto-detaching subscription wrapper."""

import logging

import pytest

from rivulet import AnonymousObserver, AutoDetachObserver, Disposable, configured
from rivulet.observer import EventObserver
from rivulet.testing import EventRecorder


@pytest.mark.unit
def test_terminal_once_drops_events_after_completion(recorder):
    """Nothing reaches an observer after its first terminal event."""
    recorder.on_next(1)
    recorder.on_completed()
    recorder.on_next(2)
    recorder.on_error(ValueError("late"))
    recorder.on_completed()

    assert recorder.describe() == ["next(1)", "completed"]


@pytest.mark.unit
def test_terminal_once_drops_events_after_error(recorder):
    """An Error event is final as well."""
    failure = ValueError("boom")

    recorder.on_error(failure)
    recorder.on_next(1)
    recorder.on_completed()

    assert recorder.error is failure
    assert not recorder.is_completed
    assert len(recorder.events) == 1


@pytest.mark.unit
def test_anonymous_observer_defaults_missing_handlers_to_noops():
    """Partial callback sets are accepted."""
    seen = []
    observer = AnonymousObserver(on_next=seen.append)

    observer.on_next(1)
    observer.on_completed()

    assert seen == [1]
    assert observer.is_stopped


@pytest.mark.unit
def test_anonymous_observer_reports_unhandled_errors():
    """Without an error handler the error goes to the configured handler."""
    reported = []
    failure = RuntimeError("nobody listens")

    with configured(unhandled_error_handler=reported.append):
        AnonymousObserver().on_error(failure)

    assert reported == [failure]


@pytest.mark.unit
def test_default_unhandled_error_handler_logs(caplog):
    """The default handler logs the error at ERROR level."""
    with caplog.at_level(logging.ERROR, logger="rivulet"):
        AnonymousObserver().on_error(RuntimeError("lost error"))

    assert "lost error" in caplog.text


@pytest.mark.unit
def test_event_observer_wraps_notifications():
    """EventObserver hands Event objects to a single callable."""
    received = []
    observer = EventObserver(lambda event: received.append(str(event)))

    observer.on_next("x")
    observer.on_completed()

    assert received == ["next(x)", "completed"]


@pytest.mark.unit
def test_auto_detach_disposes_subscription_then_runs_on_disposed():
    """A terminal event releases the upstream subscription, then on_disposed runs."""
    order = []
    auto = AutoDetachObserver(
        AnonymousObserver(on_completed=lambda: order.append("completed")),
        on_disposed=lambda: order.append("disposed"),
    )
    auto.subscription = Disposable(lambda: order.append("upstream released"))

    auto.on_completed()

    assert order == ["completed", "upstream released", "disposed"]
    assert auto.is_disposed


@pytest.mark.unit
def test_auto_detach_drops_events_after_dispose(recorder):
    """Once disposed, the wrapper forwards nothing."""
    auto = AutoDetachObserver(recorder)

    auto.on_next(1)
    auto.dispose()
    auto.on_next(2)
    auto.on_completed()

    assert recorder.describe() == ["next(1)"]


@pytest.mark.unit
def test_auto_detach_is_stopped_only_after_a_terminal_event(recorder):
    """Disposal alone does not mark the wrapper as stopped; a terminal event does."""
    disposed = AutoDetachObserver(EventRecorder())
    disposed.dispose()
    assert not disposed.is_stopped

    auto = AutoDetachObserver(recorder)
    auto.on_error(ValueError("boom"))

    assert auto.is_stopped
    assert auto.is_disposed
    assert str(recorder.error) == "boom"


@pytest.mark.unit
def test_auto_detach_reports_inner_observer_disposal(recorder):
    """is_disposed becomes true when the wrapped observer stops."""
    auto = AutoDetachObserver(recorder)
    assert not auto.is_disposed

    recorder.on_completed()

    assert auto.is_disposed


@pytest.mark.unit
def test_auto_detach_fail_reports_whether_it_delivered(recorder):
    """fail() delivers an error only while the subscription is live."""
    auto = AutoDetachObserver(recorder)

    assert auto.fail(ValueError("first")) is True
    assert auto.fail(ValueError("second")) is False
    assert str(recorder.error) == "first"


@pytest.mark.unit
def test_auto_detach_on_disposed_failure_is_logged(caplog):
    """An exception from on_disposed is logged, not raised."""

    def explode():
        raise RuntimeError("cleanup broke")

    auto = AutoDetachObserver(AnonymousObserver(), on_disposed=explode)

    with caplog.at_level(logging.ERROR, logger="rivulet"):
        auto.dispose()

    assert "cleanup broke" in caplog.text


@pytest.mark.unit
def test_recorder_repr_lists_events():
    """EventRecorder renders its events for assertion messages."""
    recorder = EventRecorder()
    recorder.on_next(1)
    recorder.on_completed()

    assert repr(recorder) == "EventRecorder(next(1), completed)"
