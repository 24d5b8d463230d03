"""Traffic simulation data models."""

from trafficsync.models.car import Car
from trafficsync.models.sample import SpeedSample
from trafficsync.models.simulation import SimulationCreated, Snapshot

__all__ = [
    "Car",
    "SimulationCreated",
    "Snapshot",
    "SpeedSample",
]
