"""
Stress test for sharing instances between threads.

All values are immutable, so this should pass without any locking,
also on free-threaded builds. Note this isn't a unit test, because
it's only meaningful with many threads and iterations.
"""

import sys
import time
from threading import Thread

from posixtime import Date, DateTime

if not hasattr(sys, "_is_gil_enabled") or sys._is_gil_enabled():
    # Running with GIL enabled can still be useful to compare performance,
    # but be sure to warn that threading hasn't been stress tested.
    print("WARNING: Running with GIL enabled. Threading not stress tested.")


SHARED_DT = DateTime(2019, 12, 31, 23, 59, 59, millisecond=999)
SHARED_DATE = Date(2020, 2, 29)
NUM_THREADS = 16
NUM_ITERATIONS = 20_000


def tick_milliseconds(n):
    """Step forward from a shared instance, crossing midnight"""
    dt = SHARED_DT
    for _ in range(n):
        dt = dt.increment_millisecond()
    assert dt.to_epoch_millis() == SHARED_DT.to_epoch_millis() + n


def roll_years(n):
    """Repeatedly move a shared leap day back and forth"""
    for _ in range(n):
        d = SHARED_DATE.increment_year().decrement_year()
        assert d == Date(2020, 2, 28)
        assert SHARED_DATE.day_of_week() is SHARED_DATE.day_of_week()


def main(func):
    print(f"Starting test: {func.__name__}")
    threads = []

    start_time = time.time()

    for _ in range(NUM_THREADS):
        thread = Thread(target=func, args=(NUM_ITERATIONS,))
        threads.append(thread)
        thread.start()

    for thread in threads:
        thread.join()

    end_time = time.time()
    assert SHARED_DT == DateTime(2019, 12, 31, 23, 59, 59, millisecond=999)
    assert SHARED_DATE == Date(2020, 2, 29)
    print(f"Execution time: {end_time - start_time:.2f} seconds")


if __name__ == "__main__":
    main(tick_milliseconds)
    main(roll_years)
