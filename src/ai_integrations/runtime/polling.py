"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Bounded polling of asynchronous runs until they leave the pending states.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable

from ..errors import TimeoutExceededError
from ..types import PENDING_RUN_STATUSES, ThreadRun
from .contracts import PollPolicy

logger = logging.getLogger("ai_integrations.polling")

FetchRun = Callable[[str, str], Awaitable[ThreadRun]]

# Float slack so a fetch that lands exactly on the deadline still happens.
_CLOCK_SLACK_S = 1e-9


async def wait_for_run(
    fetch: FetchRun,
    thread_id: str,
    run_id: str,
    *,
    policy: PollPolicy | None = None,
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
) -> ThreadRun:
    """
    Fetch a run until its status is terminal or `policy.timeout_s` elapses.

    The first fetch happens immediately. Between fetches the caller's task
    sleeps `policy.poll_interval_s`, and a fetch that falls on the deadline
    still happens. When less than one interval is left, the final sleep is cut
    short at the deadline and `TimeoutExceededError` is raised without another
    fetch. Runs that ended as ``failed``, ``cancelled`` or ``expired`` are
    returned, not raised. Errors from `fetch` propagate unchanged.
    """
    policy = policy or PollPolicy()
    started = clock()
    run = await fetch(thread_id, run_id)
    fetches = 1

    while run.status in PENDING_RUN_STATUSES:
        remaining = policy.timeout_s - (clock() - started)
        if remaining + _CLOCK_SLACK_S < policy.poll_interval_s:
            if remaining > 0:
                await sleep(remaining)
            logger.debug(
                "Run %s on thread %s still %s after %d fetches",
                run_id,
                thread_id,
                run.status,
                fetches,
            )
            raise TimeoutExceededError(
                policy.timeout_s,
                thread_id=thread_id,
                run_id=run_id,
                last_status=run.status,
            )

        await sleep(policy.poll_interval_s)
        run = await fetch(thread_id, run_id)
        fetches += 1
        logger.debug("Run %s poll %d status=%s", run_id, fetches, run.status)

    return run
