# simcheck/utils/cancel.py
from __future__ import annotations
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeout
from typing import Callable, Optional, TypeVar
import threading

from ..errors import AnalysisCancelled

T = TypeVar("T")

POLL_INTERVAL_SEC = 0.05


def run_cancellable(
    fn: Callable[[], T],
    cancel: Optional[threading.Event] = None,
    *,
    poll_interval: float = POLL_INTERVAL_SEC,
) -> T:
    """
    Run a blocking call on a worker thread, returning its result unless
    `cancel` is set first. A cancelled call keeps running in the background
    but its result is discarded.
    """
    if cancel is None:
        return fn()
    if cancel.is_set():
        raise AnalysisCancelled()

    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="simcheck-embed")
    try:
        future = executor.submit(fn)
        while True:
            try:
                return future.result(timeout=poll_interval)
            except FutureTimeout:
                if cancel.is_set():
                    future.cancel()
                    raise AnalysisCancelled()
    finally:
        executor.shutdown(wait=False)
