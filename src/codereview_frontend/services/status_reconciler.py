"""Keep displayed review status tags in step with the API."""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable
from enum import Enum

from .formatters import StatusTag

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL_SECONDS = 10.0

StatusFetcher = Callable[[str], Awaitable[str]]
ChangeCallback = Callable[[StatusTag], None]


class ReconcilerState(str, Enum):
    """Lifecycle of a reconciler."""

    IDLE = "idle"
    POLLING = "polling"
    STOPPED = "stopped"


def has_in_flight(tags: Iterable[StatusTag]) -> bool:
    """Whether any displayed tag still needs polling."""
    return any(tag.in_flight for tag in tags)


class StatusReconciler:
    """
    Periodically re-fetch in-flight statuses and update the tags on change.

    Lifecycle:
    - IDLE: nothing started; ``start()`` with nothing in flight leaves it here
    - POLLING: a task sleeps for ``interval`` then runs a pass, repeatedly
    - STOPPED: a pass left nothing in flight, or ``stop()`` was called

    Passes never overlap: the next sleep only begins after every fetch of
    the previous pass has resolved. A failed fetch leaves its tag in flight
    and is retried on the next pass.
    """

    def __init__(
        self,
        tags: Iterable[StatusTag],
        fetch_status: StatusFetcher,
        interval: float = DEFAULT_POLL_INTERVAL_SECONDS,
        on_change: ChangeCallback | None = None,
    ):
        self.tags = list(tags)
        self.fetch_status = fetch_status
        self.interval = interval
        self.on_change = on_change
        self.state = ReconcilerState.IDLE
        self.passes = 0
        self._task: asyncio.Task | None = None

    async def reconcile(self) -> bool:
        """Run one reconciliation pass. Returns True while anything is in flight."""
        self.passes += 1
        for tag in self.tags:
            if not tag.in_flight:
                continue
            try:
                status = await self.fetch_status(tag.review_id)
            except Exception as e:
                # Keep it in flight; the next pass tries again
                logger.debug(f"Status check failed for review {tag.review_id}: {e}")
                continue
            if tag.apply(status):
                logger.info(f"Review {tag.review_id} is now {tag.text}")
                if self.on_change:
                    self.on_change(tag)
        return has_in_flight(self.tags)

    def start(self) -> asyncio.Task | None:
        """Schedule polling. Returns None when there is nothing to poll."""
        if self._task is not None:
            return self._task
        if self.state is ReconcilerState.STOPPED or not has_in_flight(self.tags):
            return None
        self.state = ReconcilerState.POLLING
        self._task = asyncio.create_task(self._run())
        return self._task

    async def stop(self) -> None:
        """Cancel polling and wait for the task to finish."""
        if self._task is None:
            self.state = ReconcilerState.STOPPED
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self.state = ReconcilerState.STOPPED

    async def wait(self) -> None:
        """Wait until polling stops on its own."""
        if self._task is not None:
            await self._task

    async def _run(self) -> None:
        try:
            while True:
                await asyncio.sleep(self.interval)
                if not await self.reconcile():
                    logger.debug(f"No reviews in flight after {self.passes} passes")
                    break
        finally:
            self.state = ReconcilerState.STOPPED
