#!/usr/bin/env python3
"""
Rivulet Playground - Runnable Tour of the Library

Every scenario prints a "--- Example of: <name> ---" section followed by
what its subscribers observe, so the output can be read next to the code.

Usage:
    python scripts/playground.py                 # Run every example
    python scripts/playground.py --list          # List example names
    python scripts/playground.py -k subject      # Run examples whose name matches
    python scripts/playground.py --debug-logs    # Show debug() output through rich
"""

import argparse
import logging
import math
import random
import sys
from typing import Callable, List, Tuple

sys.path.insert(0, ".")

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel

from rivulet import (
    BehaviorRelay,
    BehaviorSubject,
    DisposeBag,
    EventKind,
    Observable,
    PublishRelay,
    PublishSubject,
    ReplaySubject,
    Single,
    TakeBehavior,
    VirtualTimeScheduler,
    combine_latest,
    concat,
    configure,
)

console = Console()

EXAMPLES: List[Tuple[str, Callable[[], None]]] = []


def example(name: str):
    """Register a playground scenario under `name`."""

    def register(func):
        EXAMPLES.append((name, func))
        return func

    return register


def show(*values) -> None:
    console.print(*values, highlight=False)


class PlaygroundError(Exception):
    pass


_ONES = [
    "zero", "one", "two", "three", "four", "five", "six", "seven", "eight", "nine",
    "ten", "eleven", "twelve", "thirteen", "fourteen", "fifteen", "sixteen",
    "seventeen", "eighteen", "nineteen",
]
_TENS = ["", "", "twenty", "thirty", "forty", "fifty", "sixty", "seventy", "eighty", "ninety"]


def spell_out(number: int) -> str:
    if number < 20:
        return _ONES[number]
    if number < 100:
        tens, rest = divmod(number, 10)
        return _TENS[tens] + (f"-{_ONES[rest]}" if rest else "")
    hundreds, rest = divmod(number, 100)
    words = f"{_ONES[hundreds]} hundred"
    return f"{words} {spell_out(rest)}" if rest else words


def print_event(label: str):
    """Print the element if there is one, else the error, else the event itself."""

    def handler(event):
        if event.kind is EventKind.NEXT:
            show(label, event.element)
        elif event.kind is EventKind.ERROR:
            show(label, event.error)
        else:
            show(label, event)

    return handler


# ---------------------------------------------------------------------------
# Observables
# ---------------------------------------------------------------------------


@example("just, of, from")
def _just_of_from():
    one, two, three = 1, 2, 3
    Observable.just(one).subscribe(show)
    Observable.of(one, two, three).subscribe(show)
    Observable.of([one, two, three]).subscribe(show)
    Observable.from_iterable([one, two, three]).subscribe(show)


@example("subscribe")
def _subscribe():
    Observable.of(1, 2, 3).subscribe_event(show)


@example("empty")
def _empty():
    Observable.empty().subscribe(on_next=show, on_completed=lambda: show("Completed"))


@example("never")
def _never():
    Observable.never().subscribe(on_next=show, on_completed=lambda: show("Completed"))


@example("never - challenge")
def _never_challenge():
    bag = DisposeBag()
    Observable.never().do(
        on_next=lambda e: show(f"onNext: {e}"),
        after_next=lambda e: show(f"afterNext: {e}"),
        on_error=lambda e: show(f"onError: {e}"),
        after_error=lambda e: show(f"afterError: {e}"),
        on_completed=lambda: show("onCompleted"),
        after_completed=lambda: show("afterCompleted"),
        on_subscribe=lambda: show("onSubscribe"),
        on_subscribed=lambda: show("onSubscribed"),
        on_dispose=lambda: show("onDispose"),
    ).subscribe(
        on_next=show,
        on_completed=lambda: show("Completed"),
        on_disposed=lambda: show("Disposed"),
    ).disposed_by(bag)
    bag.dispose()


@example("never - challenge - 2")
def _never_challenge_debug():
    with DisposeBag() as bag:
        Observable.never().debug("never-challenge-2").subscribe(
            on_next=show,
            on_completed=lambda: show("Completed"),
            on_disposed=lambda: show("Disposed"),
        ).disposed_by(bag)


@example("range")
def _range():
    def fibonacci(n):
        return int(round((math.pow(1.61803, n) - math.pow(0.61803, n)) / 2.23606))

    Observable.range(1, 10).map(fibonacci).subscribe(show)


@example("dispose")
def _dispose():
    subscription = Observable.of("A", "B", "C").subscribe_event(show)
    subscription.dispose()


@example("create")
def _create():
    def produce(observer):
        observer.on_next("1")
        observer.on_error(PlaygroundError("anError"))
        observer.on_completed()
        observer.on_next("?")

    with DisposeBag() as bag:
        Observable.create(produce).subscribe(
            on_next=show,
            on_error=show,
            on_completed=lambda: show("Completed"),
            on_disposed=lambda: show("Disposed"),
        ).disposed_by(bag)


@example("deferred")
def _deferred():
    flip = False

    def choose():
        nonlocal flip
        flip = not flip
        return Observable.of(1, 2, 3) if flip else Observable.of(4, 5, 6)

    factory = Observable.deferred(choose)
    for _ in range(4):
        printed = []
        factory.subscribe(printed.append)
        show("".join(str(v) for v in printed))


@example("Single")
def _single():
    files = {"Copyright": "Copyright (c) rivulet contributors"}

    def load_text(name):
        def produce(emitter):
            if name in files:
                emitter.on_success(files[name])
            else:
                emitter.on_error(FileNotFoundError(name))

        return Single.create(produce)

    with DisposeBag() as bag:
        for name in ("Copyright", "Missing"):
            load_text(name).subscribe(
                show, lambda e: show(f"Error: {e!r}")
            ).disposed_by(bag)


# ---------------------------------------------------------------------------
# Subjects and relays
# ---------------------------------------------------------------------------


@example("PublishSubject")
def _publish_subject():
    subject = PublishSubject()
    subject.on_next("Is anyone listening?")

    subscription_one = subject.subscribe(show)
    subject.on_next("1")
    subject.on_next("2")

    subscription_two = subject.subscribe_event(
        lambda e: show("2),", e.element if e.kind is EventKind.NEXT else e)
    )
    subject.on_next("3")
    subscription_one.dispose()
    subject.on_next("4")
    subject.on_completed()
    subject.on_next("5")
    subscription_two.dispose()

    with DisposeBag() as bag:
        subject.subscribe_event(
            lambda e: show("3),", e.element if e.kind is EventKind.NEXT else e)
        ).disposed_by(bag)
        subject.on_next("?")


@example("BehaviorSubject")
def _behavior_subject():
    subject = BehaviorSubject("Initial value")
    with DisposeBag() as bag:
        subject.on_next("X")
        subject.subscribe_event(print_event("1)")).disposed_by(bag)
        subject.on_error(PlaygroundError("anError"))
        subject.subscribe_event(print_event("2)")).disposed_by(bag)


@example("ReplaySubject")
def _replay_subject():
    subject = ReplaySubject.create(2)
    with DisposeBag() as bag:
        for value in ("1", "2", "3"):
            subject.on_next(value)
        subject.subscribe_event(print_event("1)")).disposed_by(bag)
        subject.subscribe_event(print_event("2)")).disposed_by(bag)
        subject.on_next("4")
        subject.on_error(PlaygroundError("anError"))
        subject.dispose()
        subject.subscribe_event(print_event("3)")).disposed_by(bag)


@example("PublishRelay")
def _publish_relay():
    relay = PublishRelay()
    with DisposeBag() as bag:
        relay.accept("Knock knock, anyone home?")
        relay.subscribe(show).disposed_by(bag)
        relay.accept("1")


@example("BehaviorRelay")
def _behavior_relay():
    relay = BehaviorRelay("Initial value")
    with DisposeBag() as bag:
        relay.accept("New initial value")
        relay.subscribe_event(print_event("1)")).disposed_by(bag)
        relay.accept("1")
        relay.subscribe_event(print_event("2)")).disposed_by(bag)
        relay.accept("2")
        show(relay.value)


# ---------------------------------------------------------------------------
# Filtering
# ---------------------------------------------------------------------------


@example("ignoreElements")
def _ignore_elements():
    strikes = PublishSubject()
    with DisposeBag() as bag:
        strikes.ignore_elements().subscribe(lambda: show("You're out!")).disposed_by(bag)
        for _ in range(3):
            strikes.on_next("X")
        strikes.on_completed()


@example("elementAt")
def _element_at():
    strikes = PublishSubject()
    with DisposeBag() as bag:
        strikes.element_at(2).subscribe(lambda _: show("You're out!")).disposed_by(bag)
        for _ in range(3):
            strikes.on_next("X")


@example("filter")
def _filter():
    Observable.of(1, 2, 3, 4, 5, 6).filter(lambda v: v % 2 == 0).subscribe(show)


@example("skip")
def _skip():
    Observable.of("A", "B", "C", "D", "E", "F").skip(3).subscribe(show)


@example("skipWhile")
def _skip_while():
    Observable.of(2, 2, 3, 4, 4).skip_while(lambda v: v % 2 == 0).subscribe(show)


@example("skipUntil")
def _skip_until():
    subject, trigger = PublishSubject(), PublishSubject()
    with DisposeBag() as bag:
        subject.skip_until(trigger).subscribe(show).disposed_by(bag)
        subject.on_next("A")
        subject.on_next("B")
        trigger.on_next("X")
        subject.on_next("C")


@example("take")
def _take():
    Observable.of(1, 2, 3, 4, 5, 6).take(3).subscribe(show)


@example("takeWhile")
def _take_while():
    Observable.of(2, 2, 4, 4, 6, 6).enumerated().take_while(
        lambda pair: pair[1] % 2 == 0 and pair[0] < 3
    ).map(lambda pair: pair[1]).subscribe(show)


@example("takeUntil")
def _take_until():
    Observable.of(1, 2, 3, 4, 5).take_until(
        lambda v: v % 4 == 0, TakeBehavior.INCLUSIVE
    ).subscribe(show)


@example("takeUntil trigger")
def _take_until_trigger():
    subject, trigger = PublishSubject(), PublishSubject()
    with DisposeBag() as bag:
        subject.take_until(trigger).subscribe(show).disposed_by(bag)
        subject.on_next("1")
        subject.on_next("2")
        trigger.on_next("X")
        subject.on_next("3")


@example("distinctUntilChanged")
def _distinct_until_changed():
    Observable.of("A", "A", "B", "B", "A").distinct_until_changed().subscribe(show)


@example("distinctUntilChanged(_:)")
def _distinct_until_changed_comparer():
    def share_a_word(a, b):
        return bool(set(spell_out(a).split(" ")) & set(spell_out(b).split(" ")))

    Observable.of(10, 110, 20, 200, 210, 310).distinct_until_changed(share_a_word).subscribe(
        show
    )


# ---------------------------------------------------------------------------
# Transforming
# ---------------------------------------------------------------------------


@example("toArray")
def _to_array():
    Observable.of("A", "B", "C").to_array().subscribe(show)


@example("map")
def _map():
    Observable.of(123, 4, 56).map(spell_out).subscribe(show)


@example("enumerated and map")
def _enumerated_and_map():
    Observable.of(1, 2, 3, 4, 5, 6).enumerated().map(
        lambda pair: pair[1] * 2 if pair[0] > 2 else pair[1]
    ).subscribe(show)


@example("compactMap")
def _compact_map():
    Observable.of("To", "be", None, "or", "not", "to", "be", None).compact_map().to_array().map(
        " ".join
    ).subscribe(show)


class Student:
    def __init__(self, score):
        self.score = BehaviorSubject(score)


@example("flatMap")
def _flat_map():
    laura, charlotte = Student(80), Student(90)
    student = PublishSubject()
    with DisposeBag() as bag:
        student.flat_map(lambda s: s.score).subscribe(show).disposed_by(bag)
        student.on_next(laura)
        laura.score.on_next(85)
        student.on_next(charlotte)
        laura.score.on_next(95)
        charlotte.score.on_next(100)


@example("flatMapLatest")
def _flat_map_latest():
    laura, charlotte = Student(80), Student(90)
    student = PublishSubject()
    with DisposeBag() as bag:
        student.flat_map_latest(lambda s: s.score).subscribe(show).disposed_by(bag)
        student.on_next(laura)
        laura.score.on_next(85)
        student.on_next(charlotte)
        laura.score.on_next(95)
        charlotte.score.on_next(100)


@example("materialize and dematerialize")
def _materialize():
    laura, charlotte = Student(80), Student(100)
    student = BehaviorSubject(laura)

    def keep_values(event):
        if event.error is not None:
            show(event.error)
            return False
        return True

    with DisposeBag() as bag:
        student.flat_map_latest(lambda s: s.score.materialize()).filter(
            keep_values
        ).dematerialize().subscribe(show).disposed_by(bag)
        laura.score.on_next(85)
        laura.score.on_error(PlaygroundError("anError"))
        laura.score.on_next(90)
        student.on_next(charlotte)


# ---------------------------------------------------------------------------
# Combining
# ---------------------------------------------------------------------------


@example("startWith")
def _start_with():
    Observable.of(2, 3, 4).start_with(1).subscribe(show)


@example("Observable.concat")
def _observable_concat():
    concat(Observable.of(1, 2, 3), Observable.of(4, 5, 6)).subscribe(show)


@example("concat")
def _concat():
    german = Observable.of("Berlin", "Münich", "Frankfurt")
    spanish = Observable.of("Madrid", "Barcelona", "Valencia")
    german.concat(spanish).subscribe(show)


@example("concatMap")
def _concat_map():
    sequences = {
        "German cities": Observable.of("Berlin", "Münich", "Frankfurt"),
        "Spanish cities": Observable.of("Madrid", "Barcelona", "Valencia"),
    }
    Observable.of("German cities", "Spanish cities").concat_map(
        lambda country: sequences.get(country, Observable.empty())
    ).subscribe(show)


@example("merge")
def _merge():
    left, right = PublishSubject(), PublishSubject()
    Observable.of(left, right).merge_all().subscribe(show)

    left_values = ["Berlin", "Münich", "Frankfurt"]
    right_values = ["Madrid", "Barcelona", "Valencia"]
    while left_values or right_values:
        if random.choice((True, False)):
            if left_values:
                left.on_next(f"Left: {left_values.pop(0)}")
        elif right_values:
            right.on_next(f"Right: {right_values.pop(0)}")

    left.on_completed()
    right.on_completed()


@example("combineLatest")
def _combine_latest():
    left, right = PublishSubject(), PublishSubject()
    combine_latest(left, right, result_selector=lambda l, r: f"{l} {r}").subscribe(show)

    show("> Sending a value to left")
    left.on_next("Hello,")
    show("> Sending a value to right")
    right.on_next("world")
    show("> Sending another value to Right")
    right.on_next("RxSwift")
    show("> Sending another value to Left")
    left.on_next("Have a good day.")

    left.on_completed()
    right.on_completed()


@example("zip")
def _zip():
    Observable.of("sunny", "cloudy", "cloudy", "sunny").zip(
        Observable.of("Lisbon", "Copenhagen", "London", "Madrid", "Vienna"),
        result_selector=lambda weather, city: f"It's {weather} in {city}",
    ).subscribe(show)


@example("withLatestFrom")
def _with_latest_from():
    button, text_field = PublishSubject(), PublishSubject()
    button.with_latest_from(text_field).subscribe(show)
    for text in ("Par", "Pari", "Paris"):
        text_field.on_next(text)
    button.on_next(None)
    button.on_next(None)


@example("sample")
def _sample():
    button, text_field = PublishSubject(), PublishSubject()
    text_field.sample(button).subscribe(show)
    for text in ("Par", "Pari", "Paris"):
        text_field.on_next(text)
    button.on_next(None)
    button.on_next(None)


@example("amb")
def _amb():
    left, right = PublishSubject(), PublishSubject()
    left.amb(right).subscribe(show)
    left.on_next("Lisbon")
    right.on_next("Copenhagen")
    left.on_next("London")
    left.on_next("Madrid")
    right.on_next("Vienna")
    left.on_completed()
    right.on_completed()


@example("switchLatest")
def _switch_latest():
    one, two, three = PublishSubject(), PublishSubject(), PublishSubject()
    source = PublishSubject()
    subscription = source.switch_latest().subscribe(show)

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

    subscription.dispose()


@example("reduce")
def _reduce():
    Observable.of(1, 3, 5, 7, 9).reduce(0, lambda total, v: total + v).subscribe(show)


@example("scan")
def _scan():
    Observable.of(1, 3, 5, 7, 9).scan(0, lambda total, v: total + v).subscribe(show)


# ---------------------------------------------------------------------------
# Time based
# ---------------------------------------------------------------------------


@example("replay")
def _replay():
    scheduler = VirtualTimeScheduler()
    replayed = ReplaySubject.create(1)
    source = Observable.interval(1.0, scheduler).take(6)

    source.subscribe(replayed)
    replayed.subscribe(lambda v: show(f"[{scheduler.now:>4.1f}s] source   {v}"))
    scheduler.schedule_relative(
        3.0,
        lambda: replayed.subscribe(lambda v: show(f"[{scheduler.now:>4.1f}s] replayed {v}")),
    )
    scheduler.start()


def run(selected: List[Tuple[str, Callable[[], None]]]) -> None:
    console.print(Panel(f"{len(selected)} example(s)", title="Rivulet Playground", border_style="blue"))
    for name, func in selected:
        console.print()
        console.print(f"[bold cyan]--- Example of: {name} ---[/bold cyan]")
        func()


def main():
    parser = argparse.ArgumentParser(description="Run the rivulet playground examples")
    parser.add_argument("--list", action="store_true", help="List example names and exit")
    parser.add_argument(
        "-k", dest="keyword", help="Only run examples whose name contains KEYWORD"
    )
    parser.add_argument(
        "--debug-logs", action="store_true", help="Show rivulet debug() output"
    )
    args = parser.parse_args()

    if args.list:
        for name, _ in EXAMPLES:
            console.print(name)
        return

    logging.basicConfig(
        level=logging.DEBUG if args.debug_logs else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )
    configure(debug_log_level=logging.INFO)

    selected = [
        (name, func)
        for name, func in EXAMPLES
        if not args.keyword or args.keyword.lower() in name.lower()
    ]
    run(selected)


if __name__ == "__main__":
    main()
