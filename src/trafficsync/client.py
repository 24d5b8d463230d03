"""Public client classes for the traffic simulation service."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ValidationError

from trafficsync._http import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, AsyncTransport, SyncTransport
from trafficsync._logging import log_api_call
from trafficsync.exceptions import TrafficSimValidationError
from trafficsync.models.simulation import SimulationCreated, Snapshot

SIMULATIONS_ENDPOINT = "/simulations"


def _validate[T: BaseModel](model_type: type[T], data: Any) -> T:
    """Validate a JSON payload against a Pydantic model."""
    try:
        return model_type.model_validate(data)
    except ValidationError as exc:
        raise TrafficSimValidationError(
            f"Failed to validate {model_type.__name__} response: {exc}"
        ) from exc


class TrafficSimClient:
    """Synchronous client for the traffic simulation service.

    Usage:
        sim = TrafficSimClient()
        created = sim.create_simulation()
        snapshot = sim.snapshot(created.location)
        sim.close()

        # Or as a context manager:
        with TrafficSimClient("http://localhost:8000") as sim:
            created = sim.create_simulation()
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._transport = SyncTransport(base_url=base_url, timeout=timeout)

    def __enter__(self) -> TrafficSimClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP connection."""
        self._transport.close()

    # ── Endpoints ──────────────────────────────────────────────

    @log_api_call
    def create_simulation(self) -> SimulationCreated:
        """Provision a new simulation and return its location and initial cars."""
        data = self._transport.post(SIMULATIONS_ENDPOINT, json={})
        return _validate(SimulationCreated, data)

    @log_api_call
    def snapshot(self, location: str) -> Snapshot:
        """Get the current cars of the simulation at ``location``."""
        data = self._transport.get(location)
        return _validate(Snapshot, data)


class AsyncTrafficSimClient:
    """Asynchronous client for the traffic simulation service.

    Usage:
        async with AsyncTrafficSimClient() as sim:
            created = await sim.create_simulation()
            snapshot = await sim.snapshot(created.location)
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._transport = AsyncTransport(base_url=base_url, timeout=timeout)

    async def __aenter__(self) -> AsyncTrafficSimClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP connection."""
        await self._transport.close()

    # ── Endpoints ──────────────────────────────────────────────

    @log_api_call
    async def create_simulation(self) -> SimulationCreated:
        """Provision a new simulation and return its location and initial cars."""
        data = await self._transport.post(SIMULATIONS_ENDPOINT, json={})
        return _validate(SimulationCreated, data)

    @log_api_call
    async def snapshot(self, location: str) -> Snapshot:
        """Get the current cars of the simulation at ``location``."""
        data = await self._transport.get(location)
        return _validate(Snapshot, data)
