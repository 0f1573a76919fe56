"""Parallel fan-out with a join that surfaces failures."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Callable, Iterable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


def run_parallel(
    func: Callable[[T], R],
    items: Iterable[T],
    max_workers: int = 5,
) -> list[R]:
    """Run ``func`` over ``items`` in parallel and join all tasks.

    Every task runs to completion before this returns, so no failure is left
    unobserved. Results come back in input order.

    Raises:
        The first exception raised by a task, in input order.
    """
    items = list(items)
    if not items:
        return []

    with ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(items)))) as executor:
        futures = [executor.submit(func, item) for item in items]
        wait(futures)

    errors = [future.exception() for future in futures if future.exception()]
    if errors:
        if len(errors) > 1:
            logger.debug(f"{len(errors)} parallel tasks failed, raising the first")
        raise errors[0]

    return [future.result() for future in futures]
