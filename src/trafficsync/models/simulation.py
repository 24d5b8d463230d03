"""Simulation payload models (provisioning and per-tick snapshots)."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from trafficsync.models.car import Car


class Snapshot(BaseModel):
    """Current state of every car in a simulation."""

    model_config = ConfigDict(frozen=True)

    cars: list[Car]

    def find(self, car_id: int) -> Car | None:
        """Return the car with the given id, if present."""
        return next((car for car in self.cars if car.id == car_id), None)


class SimulationCreated(Snapshot):
    """Response to provisioning: where to poll, plus the initial cars."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    location: str = Field(alias="Location")
