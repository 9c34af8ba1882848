from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable


def run_concurrently(*calls: Callable[[], Any], parallel: bool = True) -> list[Any]:
    """Run independent read-only calls and return their results in order.

    Each repository call opens its own connection, so the calls may share
    nothing but their arguments. The first exception raised is re-raised.
    """

    if not parallel or len(calls) < 2:
        return [call() for call in calls]

    with ThreadPoolExecutor(max_workers=len(calls)) as pool:
        futures = [pool.submit(call) for call in calls]
        return [f.result() for f in futures]
