"""Unit tests for materialize, dematerialize, do and debug."""

import logging

import pytest

from rivulet import Completed, Error, Next, Observable, PublishSubject, configured
from rivulet.testing import record


@pytest.mark.unit
@pytest.mark.operators
def test_materialize_wraps_events_as_elements():
    """Every event becomes a Next carrying the Event."""
    recorder = record(Observable.of(1, 2).materialize())

    assert recorder.values == [Next(1), Next(2), Completed()]
    assert recorder.is_completed


@pytest.mark.unit
@pytest.mark.operators
def test_materialize_turns_error_into_element_then_completes():
    """A source error is emitted as a value and the result completes normally."""
    failure = RuntimeError("anError")
    subject = PublishSubject()
    recorder = record(subject.materialize())

    subject.on_next(1)
    subject.on_error(failure)

    assert recorder.values == [Next(1), Error(failure)]
    assert recorder.is_completed
    assert recorder.error is None


@pytest.mark.unit
@pytest.mark.operators
def test_dematerialize_restores_the_events():
    """dematerialize is the inverse of materialize."""
    failure = RuntimeError("anError")
    events = Observable.of(Next("a"), Next("b"), Error(failure), Next("c"))

    recorder = record(events.dematerialize())

    assert recorder.values == ["a", "b"]
    assert recorder.error is failure


@pytest.mark.unit
@pytest.mark.operators
def test_dematerialize_rejects_non_events():
    """Elements that are not events fail the sequence."""
    recorder = record(Observable.of("plain").dematerialize())

    assert isinstance(recorder.error, TypeError)


@pytest.mark.unit
@pytest.mark.operators
def test_materialize_then_filter_then_dematerialize_recovers_from_errors():
    """Error elements can be handled as data before restoring the stream."""
    subject = PublishSubject()
    recorder = record(
        subject.materialize()
        .filter(lambda event: event.error is None)
        .dematerialize()
    )

    subject.on_next(1)
    subject.on_error(ValueError("skip me"))

    assert recorder.describe() == ["next(1)", "completed"]


@pytest.mark.unit
@pytest.mark.operators
def test_do_runs_callbacks_around_events():
    """on_* run before the event is forwarded and after_* after it."""
    log = []
    source = Observable.of(1).do(
        on_subscribe=lambda: log.append("subscribe"),
        on_subscribed=lambda: log.append("subscribed"),
        on_next=lambda value: log.append(f"on_next {value}"),
        after_next=lambda value: log.append(f"after_next {value}"),
        on_completed=lambda: log.append("on_completed"),
        after_completed=lambda: log.append("after_completed"),
        on_dispose=lambda: log.append("dispose"),
    )

    source.subscribe(
        on_next=lambda value: log.append(f"observer {value}"),
        on_completed=lambda: log.append("observer completed"),
    )

    assert log == [
        "subscribe",
        "on_next 1",
        "observer 1",
        "after_next 1",
        "on_completed",
        "observer completed",
        "dispose",
        "after_completed",
        "subscribed",
    ]


@pytest.mark.unit
@pytest.mark.operators
def test_do_on_error_sees_the_error():
    """on_error and after_error observe the failure."""
    seen = []
    failure = KeyError("k")

    recorder = record(
        Observable.throw(failure).do(on_error=seen.append, after_error=seen.append)
    )

    assert seen == [failure, failure]
    assert recorder.error is failure


@pytest.mark.unit
@pytest.mark.operators
def test_do_callback_failure_becomes_error():
    """An exception raised by on_next ends the sequence."""

    def explode(value):
        raise RuntimeError("side effect failed")

    recorder = record(Observable.of(1, 2).do(on_next=explode))

    assert recorder.values == []
    assert isinstance(recorder.error, RuntimeError)


@pytest.mark.unit
@pytest.mark.operators
def test_do_on_dispose_runs_on_explicit_dispose():
    """on_dispose also runs when the subscriber disposes."""
    released = []
    subscription = Observable.never().do(on_dispose=lambda: released.append(True)).subscribe()

    subscription.dispose()
    subscription.dispose()

    assert released == [True]


@pytest.mark.unit
@pytest.mark.operators
def test_debug_logs_lifecycle(caplog):
    """debug() logs subscription, every event and disposal."""
    with caplog.at_level(logging.DEBUG, logger="rivulet"):
        Observable.of(1).debug("numbers").subscribe()

    messages = [entry.getMessage() for entry in caplog.records]
    assert any(message.endswith("numbers -> subscribed") for message in messages)
    assert any(message.endswith("numbers -> Event next(1)") for message in messages)
    assert any(message.endswith("numbers -> Event completed") for message in messages)
    assert any(message.endswith("numbers -> isDisposed") for message in messages)


@pytest.mark.unit
@pytest.mark.operators
def test_debug_uses_configured_level_and_trimming(caplog):
    """The log level and trimming come from the configuration."""
    long_value = "x" * 100

    with configured(debug_log_level=logging.INFO, debug_trim_output=True):
        with caplog.at_level(logging.INFO, logger="rivulet"):
            Observable.of(long_value).debug("long").subscribe()

    events = [entry for entry in caplog.records if "Event next" in entry.getMessage()]
    assert events[0].levelno == logging.INFO
    assert long_value not in events[0].getMessage()
    assert "..." in events[0].getMessage()
