"""Tests for order-preserving batch execution."""

import threading
import time

from codeprobe_cli.batch import SEQUENTIAL_THRESHOLD, run_batch


def _fail_on_error(entry, exc):
    raise AssertionError(f"unexpected failure for {entry}: {exc}")


def test_empty_batch():
    assert run_batch(str, [], _fail_on_error) == []


def test_results_follow_input_order():
    """Slow early entries must not be overtaken by fast late ones."""
    delays = [0.05, 0.0, 0.03, 0.0, 0.01, 0.0]

    def work(delay):
        time.sleep(delay)
        return delay

    assert run_batch(work, delays, _fail_on_error, max_workers=4) == delays


def test_small_batches_stay_on_calling_thread():
    seen = []
    run_batch(lambda entry: seen.append(threading.current_thread()), list(range(SEQUENTIAL_THRESHOLD - 1)), _fail_on_error)
    assert set(seen) == {threading.current_thread()}


def test_failure_is_isolated():
    def work(entry):
        if entry == "bad":
            raise ValueError("boom")
        return entry.upper()

    entries = ["a", "bad", "c", "d", "e"]
    results = run_batch(work, entries, lambda entry, exc: f"{entry}: {exc}")

    assert results == ["A", "bad: boom", "C", "D", "E"]


def test_failure_is_isolated_sequentially():
    def work(entry):
        if entry == 2:
            raise KeyError(entry)
        return entry * 10

    assert run_batch(work, [1, 2, 3], lambda entry, exc: None) == [10, None, 30]
