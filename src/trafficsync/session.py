"""Simulation lifecycle and per-tick state synchronization."""

from __future__ import annotations

from trafficsync._logging import get_logger
from trafficsync.buffer import SampleWindow
from trafficsync.client import AsyncTrafficSimClient
from trafficsync.estimator import estimate_speed
from trafficsync.exceptions import SessionNotProvisionedError, TrafficSimError
from trafficsync.models.car import Car
from trafficsync.models.sample import SpeedSample
from trafficsync.models.simulation import SimulationCreated, Snapshot
from trafficsync.track import SAMPLE_CAPACITY, TrackGeometry


class SyncSession:
    """Owns one provisioned simulation and the tracked car's speed series.

    ``provision()`` and ``refresh()`` talk to the service; the state changes
    they make live in ``apply_provisioned()`` and ``apply_snapshot()``.

    Usage:
        async with AsyncTrafficSimClient() as sim:
            session = SyncSession(sim)
            if await session.provision():
                await session.refresh(rate_hz=10)
                print(session.samples.to_list())
    """

    def __init__(
        self,
        client: AsyncTrafficSimClient,
        geometry: TrackGeometry | None = None,
        capacity: int = SAMPLE_CAPACITY,
    ) -> None:
        self._client = client
        self.geometry = geometry or TrackGeometry()
        self.samples = SampleWindow(capacity)
        self._location: str | None = None
        self._cars: list[Car] = []
        self._previous_position: float | None = None
        self._sample_count = 0
        # previous position still comes from the provisioning snapshot
        self._seeded = False
        # bumped on every provisioning; refreshes issued under an older value are stale
        self._generation = 0

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------

    @property
    def location(self) -> str | None:
        return self._location

    @property
    def is_provisioned(self) -> bool:
        return bool(self._location)

    @property
    def cars(self) -> list[Car]:
        return list(self._cars)

    @property
    def previous_position(self) -> float | None:
        return self._previous_position

    @property
    def sample_count(self) -> int:
        """Number of samples computed since the last provisioning."""
        return self._sample_count

    @property
    def tracked_car(self) -> Car | None:
        tracked_id = self.geometry.tracked_id
        return next((car for car in self._cars if car.id == tracked_id), None)

    # ------------------------------------------------------------------
    # Service calls
    # ------------------------------------------------------------------

    async def provision(self) -> bool:
        """Create a new simulation and reset the speed series.

        Returns False (leaving the session untouched) if the request fails or
        the payload is malformed.
        """
        try:
            created = await self._client.create_simulation()
        except TrafficSimError as exc:
            get_logger().warning("Provisioning failed: %s: %s", type(exc).__name__, exc)
            return False
        self.apply_provisioned(created)
        return True

    async def refresh(self, rate_hz: float) -> bool:
        """Fetch the current snapshot and derive the next speed sample.

        A failed request drops the tick: nothing is changed and False is
        returned. Responses to requests issued before the latest provisioning
        are discarded the same way.

        Raises:
            SessionNotProvisionedError: If called before ``provision()`` succeeded.
        """
        if not self.is_provisioned:
            raise SessionNotProvisionedError("refresh() called before provision()")
        location = self._location
        generation = self._generation
        try:
            snapshot = await self._client.snapshot(location)
        except TrafficSimError as exc:
            get_logger().warning(
                "Dropped tick for %s: %s: %s", location, type(exc).__name__, exc,
            )
            return False
        if generation != self._generation:
            get_logger().info("Discarded stale snapshot from %s", location)
            return False
        self.apply_snapshot(snapshot, rate_hz)
        return True

    # ------------------------------------------------------------------
    # State transitions
    # ------------------------------------------------------------------

    def apply_provisioned(self, created: SimulationCreated) -> None:
        """Adopt a freshly provisioned simulation."""
        self._generation += 1
        self._location = created.location
        self._cars = list(created.cars)
        self.samples.reset()
        self._sample_count = 0
        self._previous_position = None
        self._seeded = False

        # Seed from the initial snapshot so the first poll can already yield a sample
        tracked = created.find(self.geometry.tracked_id)
        if tracked is not None and tracked.position is not None:
            self._previous_position = tracked.position
            self._seeded = True
        get_logger().info(
            "Provisioned %s with %d cars", created.location, len(created.cars),
        )

    def apply_snapshot(self, snapshot: Snapshot, rate_hz: float) -> SpeedSample | None:
        """Replace the car set and append a speed sample when one is computable.

        Returns the appended sample, if any.
        """
        self._cars = list(snapshot.cars)

        tracked = snapshot.find(self.geometry.tracked_id)
        if tracked is None or tracked.position is None:
            return None

        current = tracked.position
        seeded = self._seeded
        self._seeded = False
        # a first poll that repeats the provisioning snapshot is not a zero-speed sample
        repeated_seed = seeded and current == self._previous_position
        sample = None
        if self._previous_position is not None and not repeated_seed:
            speed = estimate_speed(
                self._previous_position,
                current,
                extent=self.geometry.extent,
                scale=self.geometry.scale,
                rate=rate_hz,
            )
            self._sample_count += 1
            sample = SpeedSample(index=self._sample_count, value=speed)
            self.samples.append(sample)
        self._previous_position = current
        return sample
