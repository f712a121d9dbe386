"""
Shared fixtures for adversarial tests.

Provides a helper that fires the same call from many threads at once,
released together by a barrier so the calls genuinely overlap.
"""

import threading
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor

import pytest


@pytest.fixture
def run_concurrently() -> Callable[[Callable[[], object], int], list[object]]:
    """
    Run `attack` on `count` threads simultaneously.

    Returns one entry per thread: the call's return value, or the
    exception it raised.
    """

    def _run(attack: Callable[[], object], count: int) -> list[object]:
        barrier = threading.Barrier(count)

        def attempt() -> object:
            barrier.wait()
            try:
                return attack()
            except Exception as exc:
                return exc

        with ThreadPoolExecutor(max_workers=count) as executor:
            futures = [executor.submit(attempt) for _ in range(count)]
            return [f.result() for f in futures]

    return _run
