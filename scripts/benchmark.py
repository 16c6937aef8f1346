#!/usr/bin/env python3
"""
Rivulet vs RxPY Performance Comparison

Runs the same reactive workloads on rivulet and on RxPY (the `reactivex`
package) and reports throughput, memory and garbage collection side by side.

Benchmark Categories:
- Subject Creation: Creating subjects and pushing a first value
- Individual Updates: Pushing values into subscribed subjects
- Chain Propagation: Values travelling through a chain of maps
- Reactive Fan-out: One subject feeding many subscribers
- Stream Combination: merge, zip and combine_latest
- Accumulation: scan over a long sequence
- Conditional Emission: take_until / skip_until triggers

Usage:
    python scripts/benchmark.py             # Run the comparison
    python scripts/benchmark.py --config    # Show the configuration
"""

import argparse
import gc
import sys
import time
import tracemalloc
from dataclasses import dataclass
from typing import Callable, Dict, TypeVar

sys.path.insert(0, ".")

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

import rivulet
from rivulet import Observable, PublishSubject

try:
    import reactivex
except ImportError:
    print("RxPY not available. Install with: pip install -e '.[scripts]'")
    sys.exit(1)

from reactivex import operators as ops
from reactivex.subject import Subject

T = TypeVar("T")

# Configuration
TIME_LIMIT_SECONDS = 1.0
STARTING_N = 10
SCALE_FACTOR = 1.5
MAX_N = 2_000_000
# Subscribing recurses once per stage, so chains stay shallow
CHAIN_DEPTH = 50

LIBRARIES = ("Rivulet", "RxPY")


@dataclass
class BenchmarkMetrics:
    """Complete metrics from a benchmark run."""

    library: str
    operation: str
    max_n: int
    operation_time: float
    operations_per_second: float
    memory_peak_kb: int
    memory_allocated_kb: int
    gc_total_collections: int
    objects_delta: int


class BenchmarkProfiler:
    """Profile time, memory and GC activity of one benchmark run."""

    def __enter__(self):
        gc.collect()
        tracemalloc.start()
        self.memory_start, _ = tracemalloc.get_traced_memory()
        self.gc_before = gc.get_count()
        self.objects_before = len(gc.get_objects())
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, *args):
        self.end_time = time.perf_counter()
        self.gc_after = gc.get_count()
        self.objects_after = len(gc.get_objects())
        self.memory_end, self.memory_peak = tracemalloc.get_traced_memory()
        tracemalloc.stop()

    def get_metrics(
        self, library: str, operation: str, n: int, operations_performed: int
    ) -> BenchmarkMetrics:
        elapsed = self.end_time - self.start_time
        collections = sum(
            max(0, after - before) for before, after in zip(self.gc_before, self.gc_after)
        )
        return BenchmarkMetrics(
            library=library,
            operation=operation,
            max_n=n,
            operation_time=elapsed,
            operations_per_second=operations_performed / elapsed if elapsed > 0 else 0,
            memory_peak_kb=self.memory_peak // 1024,
            memory_allocated_kb=(self.memory_end - self.memory_start) // 1024,
            gc_total_collections=collections,
            objects_delta=self.objects_after - self.objects_before,
        )


def run_adaptive_benchmark(
    library: str,
    operation: str,
    operation_func: Callable[[int], T],
    operations_counter: Callable[[T], int] = lambda n: n,
) -> BenchmarkMetrics:
    """Grow the workload until it takes TIME_LIMIT_SECONDS, then profile that size."""
    n = STARTING_N
    while n < MAX_N:
        start = time.perf_counter()
        operation_func(n)
        if time.perf_counter() - start >= TIME_LIMIT_SECONDS:
            break
        n = int(n * SCALE_FACTOR)

    with BenchmarkProfiler() as profiler:
        result = operation_func(n)
        performed = operations_counter(result)

    return profiler.get_metrics(library, operation, n, performed)


# ---------------------------------------------------------------------------
# Workloads: each pair does the same work on both libraries
# ---------------------------------------------------------------------------


def rivulet_creation(n):
    subjects = []
    for i in range(n):
        subject = PublishSubject()
        subject.on_next(i)
        subjects.append(subject)
    return subjects


def rxpy_creation(n):
    subjects = []
    for i in range(n):
        subject = Subject()
        subject.on_next(i)
        subjects.append(subject)
    return subjects


def rivulet_updates(n):
    subject = PublishSubject()
    subject.subscribe(lambda _: None)
    for i in range(n):
        subject.on_next(i)
    return n


def rxpy_updates(n):
    subject = Subject()
    subject.subscribe(lambda _: None)
    for i in range(n):
        subject.on_next(i)
    return n


def rivulet_chain(n):
    base = PublishSubject()
    current = base
    for i in range(CHAIN_DEPTH):
        current = current.map(lambda x, i=i: x + i)
    current.subscribe(lambda _: None)
    for i in range(n):
        base.on_next(i)
    return n


def rxpy_chain(n):
    base = Subject()
    current = base
    for i in range(CHAIN_DEPTH):
        current = current.pipe(ops.map(lambda x, i=i: x + i))
    current.subscribe(lambda _: None)
    for i in range(n):
        base.on_next(i)
    return n


def rivulet_fanout(n):
    base = PublishSubject()
    for i in range(n):
        base.map(lambda x, i=i: x + i).subscribe(lambda _: None)
    base.on_next(100)
    return n


def rxpy_fanout(n):
    base = Subject()
    for i in range(n):
        base.pipe(ops.map(lambda x, i=i: x + i)).subscribe(lambda _: None)
    base.on_next(100)
    return n


def rivulet_merge(n):
    left, right = PublishSubject(), PublishSubject()
    rivulet.merge(left, right).subscribe(lambda _: None)
    for i in range(n):
        left.on_next(i)
        right.on_next(i * 2)
    return n * 2


def rxpy_merge(n):
    left, right = Subject(), Subject()
    reactivex.merge(left, right).subscribe(lambda _: None)
    for i in range(n):
        left.on_next(i)
        right.on_next(i * 2)
    return n * 2


def rivulet_zip(n):
    rivulet.zip(Observable.range(0, n), Observable.range(0, n)).subscribe(lambda _: None)
    return n


def rxpy_zip(n):
    reactivex.zip(reactivex.range(0, n), reactivex.range(0, n)).subscribe(lambda _: None)
    return n


def rivulet_combine_latest(n):
    left, right = PublishSubject(), PublishSubject()
    rivulet.combine_latest(left, right).subscribe(lambda _: None)
    for i in range(n):
        left.on_next(i)
        right.on_next(i)
    return n * 2


def rxpy_combine_latest(n):
    left, right = Subject(), Subject()
    reactivex.combine_latest(left, right).subscribe(lambda _: None)
    for i in range(n):
        left.on_next(i)
        right.on_next(i)
    return n * 2


def rivulet_scan(n):
    Observable.range(0, n).scan(0, lambda total, v: total + v).subscribe(lambda _: None)
    return n


def rxpy_scan(n):
    reactivex.range(0, n).pipe(ops.scan(lambda total, v: total + v, 0)).subscribe(
        lambda _: None
    )
    return n


def rivulet_take_until(n):
    source, trigger = PublishSubject(), PublishSubject()
    source.take_until(trigger).subscribe(lambda _: None)
    for i in range(n):
        source.on_next(i)
    trigger.on_next(None)
    return n


def rxpy_take_until(n):
    source, trigger = Subject(), Subject()
    source.pipe(ops.take_until(trigger)).subscribe(lambda _: None)
    for i in range(n):
        source.on_next(i)
    trigger.on_next(None)
    return n


def rivulet_skip_until(n):
    source, trigger = PublishSubject(), PublishSubject()
    source.skip_until(trigger).subscribe(lambda _: None)
    trigger.on_next(None)
    for i in range(n):
        source.on_next(i)
    return n


def rxpy_skip_until(n):
    source, trigger = Subject(), Subject()
    source.pipe(ops.skip_until(trigger)).subscribe(lambda _: None)
    trigger.on_next(None)
    for i in range(n):
        source.on_next(i)
    return n


BENCHMARKS = [
    ("Subject Creation", rivulet_creation, rxpy_creation, len),
    ("Individual Updates", rivulet_updates, rxpy_updates, None),
    ("Chain Propagation", rivulet_chain, rxpy_chain, None),
    ("Reactive Fan-out", rivulet_fanout, rxpy_fanout, None),
    ("Stream Merge", rivulet_merge, rxpy_merge, None),
    ("Stream Zip", rivulet_zip, rxpy_zip, None),
    ("Combine Latest", rivulet_combine_latest, rxpy_combine_latest, None),
    ("Scan", rivulet_scan, rxpy_scan, None),
    ("Take Until", rivulet_take_until, rxpy_take_until, None),
    ("Skip Until", rivulet_skip_until, rxpy_skip_until, None),
]


class RivuletRxpyComparison:
    """Compare rivulet and RxPY performance with GC analysis."""

    def __init__(self, quiet: bool = False):
        self.console = Console()
        self.quiet = quiet
        self.results: Dict[str, Dict[str, BenchmarkMetrics]] = {}

    def run_comparison(self):
        start_time = time.time()
        self._display_header()

        for name, rivulet_op, rxpy_op, counter in BENCHMARKS:
            if not self.quiet:
                self.console.print(f"[yellow]Running {name} comparison...[/yellow]")
            counter = counter or (lambda n: n)
            rivulet_result = run_adaptive_benchmark("Rivulet", name, rivulet_op, counter)
            rxpy_result = run_adaptive_benchmark("RxPY", name, rxpy_op, counter)
            self.results[name] = {"Rivulet": rivulet_result, "RxPY": rxpy_result}
            if not self.quiet:
                self._display_progress(name, rivulet_result, rxpy_result)

        self._display_comparison_results()
        self._display_memory_comparison()
        self._display_summary()

        elapsed = time.time() - start_time
        self.console.print(f"\n[dim]Comparison completed in {elapsed:.2f} seconds[/dim]")

    def _display_header(self):
        header = Panel(
            "Rivulet vs RxPY Performance Comparison",
            title="Library Comparison",
            border_style="blue",
        )
        self.console.print(header)
        self.console.print()

    def _display_progress(
        self, operation_name: str, ours: BenchmarkMetrics, theirs: BenchmarkMetrics
    ):
        self.console.print(
            f"[green]✓[/green] {operation_name}: "
            f"Rivulet {ours.operations_per_second:,.0f} ops/sec vs "
            f"RxPY {theirs.operations_per_second:,.0f} ops/sec ({_winner_text(ours, theirs)})"
        )

    def _display_comparison_results(self):
        self.console.print()
        table = Table(title="Performance Comparison")
        table.add_column("Operation", style="cyan")
        table.add_column("Rivulet ops/sec", style="green", justify="right")
        table.add_column("RxPY ops/sec", style="blue", justify="right")
        table.add_column("Winner", style="yellow", justify="center")
        table.add_column("Speedup", style="magenta", justify="right")

        for name, pair in self.results.items():
            ours, theirs = pair["Rivulet"], pair["RxPY"]
            winner, speedup = _speedup(ours, theirs)
            table.add_row(
                name,
                f"{ours.operations_per_second:,.0f}",
                f"{theirs.operations_per_second:,.0f}",
                winner,
                f"{speedup:.2f}x",
            )

        self.console.print(table)

    def _display_memory_comparison(self):
        self.console.print()
        table = Table(title="Memory and GC")
        table.add_column("Operation", style="cyan")
        table.add_column("Library", style="white")
        table.add_column("Peak Memory", style="yellow", justify="right")
        table.add_column("Allocated", style="green", justify="right")
        table.add_column("Object Δ", style="blue", justify="right")
        table.add_column("GCs", style="red", justify="right")

        for name, pair in self.results.items():
            for library in LIBRARIES:
                r = pair[library]
                table.add_row(
                    name if library == "Rivulet" else "",
                    library,
                    f"{r.memory_peak_kb:,} KB",
                    f"{r.memory_allocated_kb:,} KB",
                    f"{r.objects_delta:,}",
                    str(r.gc_total_collections),
                )

        self.console.print(table)

    def _display_summary(self):
        self.console.print()
        wins = {library: 0 for library in LIBRARIES}
        for pair in self.results.values():
            winner, _ = _speedup(pair["Rivulet"], pair["RxPY"])
            wins[winner] += 1

        if wins["Rivulet"] == wins["RxPY"]:
            winner, color = "Tie", "yellow"
        elif wins["Rivulet"] > wins["RxPY"]:
            winner, color = "Rivulet", "green"
        else:
            winner, color = "RxPY", "blue"

        summary = Panel(
            f"Overall Winner: {winner}\n"
            f"Rivulet wins: {wins['Rivulet']}\nRxPY wins: {wins['RxPY']}",
            title="Performance Summary",
            border_style=color,
        )
        self.console.print(summary)


def _speedup(ours: BenchmarkMetrics, theirs: BenchmarkMetrics):
    a, b = ours.operations_per_second, theirs.operations_per_second
    if a >= b:
        return "Rivulet", a / b if b else float("inf")
    return "RxPY", b / a if a else float("inf")


def _winner_text(ours: BenchmarkMetrics, theirs: BenchmarkMetrics) -> str:
    winner, speedup = _speedup(ours, theirs)
    color = "green" if winner == "Rivulet" else "blue"
    return f"[{color}]{winner} {speedup:.1f}x faster[/{color}]"


def print_config():
    """Print the current benchmark configuration."""
    print("Rivulet vs RxPY Comparison Configuration:")
    print(f"  TIME_LIMIT_SECONDS: {TIME_LIMIT_SECONDS}")
    print(f"  STARTING_N: {STARTING_N}")
    print(f"  SCALE_FACTOR: {SCALE_FACTOR}")
    print(f"  MAX_N: {MAX_N}")
    print(f"  CHAIN_DEPTH: {CHAIN_DEPTH}")
    print("\nBenchmark Categories:")
    for name, *_ in BENCHMARKS:
        print(f"  - {name}")


def main():
    parser = argparse.ArgumentParser(description="Rivulet vs RxPY Performance Comparison")
    parser.add_argument(
        "--config", action="store_true", help="Show current benchmark configuration"
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output, show only final results",
    )
    args = parser.parse_args()

    if args.config:
        print_config()
        return

    RivuletRxpyComparison(quiet=args.quiet).run_comparison()


if __name__ == "__main__":
    main()
