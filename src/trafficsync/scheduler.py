"""Restartable fixed-rate polling of a SyncSession."""

from __future__ import annotations

import asyncio
from enum import Enum

from trafficsync._logging import get_logger
from trafficsync.session import SyncSession
from trafficsync.track import DEFAULT_RATE_HZ


class SchedulerState(str, Enum):
    """Whether a polling schedule is active."""

    IDLE = "idle"
    RUNNING = "running"


class PollScheduler:
    """Calls ``session.refresh()`` every ``1 / rate_hz`` seconds.

    Must be driven from inside a running asyncio event loop. A firing is
    skipped while the previous refresh is still in flight, so snapshots are
    applied in the order they were requested. ``stop()`` prevents future
    firings but lets an in-flight refresh complete.

    Usage:
        scheduler = PollScheduler(session, rate_hz=10)
        scheduler.start()
        ...
        scheduler.set_rate(30)  # takes effect immediately
        scheduler.stop()
    """

    def __init__(self, session: SyncSession, rate_hz: float = DEFAULT_RATE_HZ) -> None:
        self._session = session
        self._rate_hz = _check_rate(rate_hz)
        self._task: asyncio.Task[None] | None = None
        self._inflight: asyncio.Task[bool] | None = None

    @property
    def rate_hz(self) -> float:
        return self._rate_hz

    @property
    def interval(self) -> float:
        """Seconds between firings."""
        return 1.0 / self._rate_hz

    @property
    def state(self) -> SchedulerState:
        if self._task is not None and not self._task.done():
            return SchedulerState.RUNNING
        return SchedulerState.IDLE

    @property
    def is_running(self) -> bool:
        return self.state is SchedulerState.RUNNING

    def start(self, rate_hz: float | None = None) -> bool:
        """Begin polling, replacing any active schedule.

        Returns False without scheduling anything if the session has not
        been provisioned.
        """
        if not self._session.is_provisioned:
            get_logger().warning("Start ignored: no simulation provisioned")
            return False
        if rate_hz is not None:
            self._rate_hz = _check_rate(rate_hz)
        self.stop()
        self._task = asyncio.get_running_loop().create_task(self._run(self.interval))
        get_logger().info("Polling %s at %g Hz", self._session.location, self._rate_hz)
        return True

    def stop(self) -> None:
        """Cancel the active schedule, if any."""
        if self._task is None:
            return
        self._task.cancel()
        self._task = None

    def set_rate(self, rate_hz: float) -> None:
        """Change the polling rate, restarting the schedule if it is active."""
        was_running = self.is_running
        self._rate_hz = _check_rate(rate_hz)
        if was_running:
            self.start()

    async def aclose(self) -> None:
        """Stop polling and wait for an in-flight refresh to finish."""
        self.stop()
        if self._inflight is not None and not self._inflight.done():
            await asyncio.wait({self._inflight})
        self._inflight = None

    async def _run(self, interval: float) -> None:
        while True:
            await asyncio.sleep(interval)
            self._fire()

    def _fire(self) -> None:
        if self._inflight is not None and not self._inflight.done():
            get_logger().debug("Skipped tick: previous refresh still in flight")
            return
        self._inflight = asyncio.get_running_loop().create_task(
            self._session.refresh(self._rate_hz),
        )
        self._inflight.add_done_callback(_report_failure)


def _report_failure(task: asyncio.Task[bool]) -> None:
    if task.cancelled() or task.exception() is None:
        return
    exc = task.exception()
    get_logger().error("Refresh raised %s: %s", type(exc).__name__, exc)


def _check_rate(rate_hz: float) -> float:
    if rate_hz <= 0:
        raise ValueError(f"rate_hz must be positive, got {rate_hz}")
    return rate_hz
