"""
Demo entry point: runs the decorator scenarios against real timers.
"""

import argparse
import threading
import time

from callgate import delay, get_default_scheduler, memoize, once, shutdown_default_scheduler, throttle
from callgate.config.settings import load_environment
from callgate.utils.logger import get_logger

logger = get_logger(__name__)


def run_once_scenario() -> None:
    """Call a once-wrapped counter five times."""
    count = 0

    def increment():
        nonlocal count
        count += 1
        return count

    gated = once(increment)
    results = [gated() for _ in range(5)]
    print(f"once: results={results} body_runs={count}")


def run_memoize_scenario() -> None:
    """Double 3 twice through a memoized function."""
    runs = 0

    def double(n):
        nonlocal runs
        runs += 1
        return n * 2

    cached = memoize(double)
    print(f"memoize: results={[cached(3), cached(3)]} body_runs={runs}")


def run_delay_scenario(wait_ms: int) -> None:
    """Schedule one deferred call and wait for it."""
    done = threading.Event()
    started = time.monotonic()

    def report(a, b):
        elapsed = (time.monotonic() - started) * 1000
        print(f"delay: called with ({a!r}, {b!r}) after {elapsed:.0f}ms")
        done.set()

    delay(report, wait_ms, "a", "b")
    print("delay: scheduled, caller returned")
    done.wait(timeout=wait_ms / 1000 + 5)


def run_throttle_scenario(wait_ms: int) -> None:
    """Call a throttled counter at t=0, 10ms and 20ms, then let the window drain."""
    runs = []
    started = time.monotonic()

    def increment():
        runs.append(round((time.monotonic() - started) * 1000))
        return len(runs)

    throttled = throttle(increment, wait_ms)
    for _ in range(3):
        throttled()
        time.sleep(0.01)
    time.sleep(3 * wait_ms / 1000 + 0.2)
    print(f"throttle: body ran {len(runs)} time(s) at ~{runs}ms")


def main() -> None:
    """
    Parse arguments, run the selected scenarios and stop the timer service.
    """
    parser = argparse.ArgumentParser(description="callgate decorator demo")
    parser.add_argument(
        "--scenario",
        choices=["once", "memoize", "delay", "throttle", "all"],
        default="all",
        help="Scenario to run (default: all)",
    )
    parser.add_argument(
        "--wait-ms",
        type=int,
        default=100,
        help="Window / delay length in milliseconds for timer scenarios",
    )
    args = parser.parse_args()

    load_environment()
    logger.info(f"Running scenario(s): {args.scenario}")

    try:
        if args.scenario in ("once", "all"):
            run_once_scenario()
        if args.scenario in ("memoize", "all"):
            run_memoize_scenario()
        if args.scenario in ("delay", "all"):
            run_delay_scenario(args.wait_ms)
        if args.scenario in ("throttle", "all"):
            run_throttle_scenario(args.wait_ms)
            logger.info(f"Timer service status: {get_default_scheduler().get_status()}")
    finally:
        shutdown_default_scheduler()


if __name__ == "__main__":
    main()
