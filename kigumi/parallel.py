"""Running work over a sequence with a pool of threads."""

from __future__ import annotations

import heapq
import os
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Optional, Sequence, TypeVar

T = TypeVar("T")
S = TypeVar("S")


def _resolve_threads(num_threads: Optional[int]) -> int:
    if num_threads is None:
        return os.cpu_count() or 1
    if num_threads < 1:
        raise ValueError("num_threads must be at least 1")
    return num_threads


def parallel_do(
    items: Sequence[T],
    init: Callable[[], S],
    body: Callable[[T, S], Any],
    post: Callable[[S], Any],
    num_threads: Optional[int] = None,
) -> None:
    """Apply ``body`` to every item with per-thread state.

    Each worker creates its state with ``init``, processes items handed out
    in order, and finally passes its state to ``post``; calls to ``post``
    never overlap. The first exception raised by a worker is re-raised.
    """
    threads_wanted = _resolve_threads(num_threads)
    items = items if isinstance(items, Sequence) else list(items)
    size = len(items)
    if size == 0:
        return

    count = min(threads_wanted, size)
    if count == 1:
        state = init()
        for item in items:
            body(item, state)
        post(state)
        return

    lock = threading.Lock()
    next_index = 0
    errors: list[BaseException] = []

    def worker() -> None:
        nonlocal next_index
        try:
            state = init()
            while True:
                with lock:
                    index = next_index
                    next_index += 1
                if index >= size:
                    break
                body(items[index], state)
                if errors:
                    return
            with lock:
                post(state)
        except Exception as exc:  # noqa: BLE001 - handed back to the caller
            with lock:
                if not errors:
                    errors.append(exc)

    workers = [threading.Thread(target=worker) for _ in range(count)]
    for thread in workers:
        thread.start()
    for thread in workers:
        thread.join()

    if errors:
        raise errors[0]


def parallel_sort(
    items: list,
    key: Optional[Callable[[Any], Any]] = None,
    num_threads: Optional[int] = None,
) -> None:
    """Sort ``items`` in place by sorting chunks concurrently and merging them."""
    threads_wanted = _resolve_threads(num_threads)
    size = len(items)
    if size == 0:
        return

    count = min(threads_wanted, (size + 1023) // 1024)
    if count == 1:
        items.sort(key=key)
        return

    per_thread = size // count
    bounds = [tid * per_thread for tid in range(count)] + [size]
    runs = [items[lo:hi] for lo, hi in zip(bounds, bounds[1:])]

    def sort_run(run: list) -> list:
        run.sort(key=key)
        return run

    def merge_pair(pair: list) -> list:
        if len(pair) == 1:
            return pair[0]
        return list(heapq.merge(pair[0], pair[1], key=key))

    with ThreadPoolExecutor(max_workers=count) as pool:
        runs = list(pool.map(sort_run, runs))
        while len(runs) > 1:
            pairs = [runs[i : i + 2] for i in range(0, len(runs), 2)]
            runs = list(pool.map(merge_pair, pairs))

    items[:] = runs[0]