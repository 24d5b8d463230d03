"""Background event loop hosting the polling pipeline for the dashboard."""

from __future__ import annotations

import asyncio
import threading
from collections.abc import Coroutine
from dataclasses import dataclass, field
from typing import Any

from trafficsync import (
    AsyncTrafficSimClient,
    Car,
    PollScheduler,
    SpeedSample,
    SyncSession,
    TrackGeometry,
)
from trafficsync._http import DEFAULT_BASE_URL
from trafficsync._logging import get_logger
from trafficsync.exceptions import TrafficSimTimeoutError
from trafficsync.track import DEFAULT_RATE_HZ


@dataclass(frozen=True)
class LiveView:
    """Point-in-time copy of everything the page draws."""

    location: str | None
    rate_hz: float
    is_running: bool
    previous_position: float | None = None
    cars: list[Car] = field(default_factory=list)
    samples: list[SpeedSample] = field(default_factory=list)

    @property
    def is_provisioned(self) -> bool:
        return bool(self.location)


class LiveRuntime:
    """Runs a SyncSession and PollScheduler on a dedicated asyncio thread.

    Streamlit reruns the page script on every interaction, so the session
    and its schedule live here and the page only issues commands and reads
    ``view()`` copies. All session state is touched on the loop thread.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        geometry: TrackGeometry | None = None,
        rate_hz: float = DEFAULT_RATE_HZ,
        timeout: float = 5.0,
    ) -> None:
        self._loop = asyncio.new_event_loop()
        self._thread = threading.Thread(
            target=self._loop.run_forever, name="trafficsync-poll", daemon=True,
        )
        self._thread.start()
        self._client = AsyncTrafficSimClient(base_url=base_url, timeout=timeout)
        self.session = SyncSession(self._client, geometry)
        self.scheduler = PollScheduler(self.session, rate_hz)
        self._timeout = timeout

    @property
    def geometry(self) -> TrackGeometry:
        return self.session.geometry

    def _call[T](self, coro: Coroutine[Any, Any, T]) -> T:
        future = asyncio.run_coroutine_threadsafe(coro, self._loop)
        try:
            return future.result(self._timeout + 1.0)
        except TimeoutError as exc:
            # cancel on the loop so a late response is never applied
            future.cancel()
            raise TrafficSimTimeoutError(
                f"No result from the polling loop within {self._timeout + 1.0:g}s"
            ) from exc

    # ── Commands ───────────────────────────────────────────────

    def setup(self) -> bool:
        """Provision a new simulation; False if the service was unavailable."""
        try:
            return self._call(self.session.provision())
        except TrafficSimTimeoutError as exc:
            get_logger().warning("Provisioning abandoned: %s", exc)
            return False

    def start(self) -> bool:
        async def _start() -> bool:
            return self.scheduler.start()

        return self._call(_start())

    def stop(self) -> None:
        async def _stop() -> None:
            self.scheduler.stop()

        self._call(_stop())

    def set_rate(self, rate_hz: float) -> None:
        async def _set_rate() -> None:
            self.scheduler.set_rate(rate_hz)

        self._call(_set_rate())

    def view(self) -> LiveView:
        async def _view() -> LiveView:
            return LiveView(
                location=self.session.location,
                rate_hz=self.scheduler.rate_hz,
                is_running=self.scheduler.is_running,
                previous_position=self.session.previous_position,
                cars=self.session.cars,
                samples=self.session.samples.to_list(),
            )

        return self._call(_view())

    def close(self) -> None:
        """Stop polling, close the HTTP client and shut the loop down."""
        self._call(self.scheduler.aclose())
        self._call(self._client.close())
        self._loop.call_soon_threadsafe(self._loop.stop)
        self._thread.join()
        self._loop.close()
