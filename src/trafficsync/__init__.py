"""trafficsync: polling client and speed metrics for a remote traffic simulation."""

from trafficsync.buffer import SampleWindow
from trafficsync.client import AsyncTrafficSimClient, TrafficSimClient
from trafficsync.estimator import estimate_speed, wrap_delta
from trafficsync.exceptions import (
    SessionNotProvisionedError,
    TrafficSimAPIError,
    TrafficSimConnectionError,
    TrafficSimError,
    TrafficSimTimeoutError,
    TrafficSimValidationError,
)
from trafficsync.models import Car, SimulationCreated, Snapshot, SpeedSample
from trafficsync.scheduler import PollScheduler, SchedulerState
from trafficsync.session import SyncSession
from trafficsync.track import TrackGeometry

__all__ = [
    "AsyncTrafficSimClient",
    "Car",
    "PollScheduler",
    "SampleWindow",
    "SchedulerState",
    "SessionNotProvisionedError",
    "SimulationCreated",
    "Snapshot",
    "SpeedSample",
    "SyncSession",
    "TrackGeometry",
    "TrafficSimAPIError",
    "TrafficSimClient",
    "TrafficSimConnectionError",
    "TrafficSimError",
    "TrafficSimTimeoutError",
    "TrafficSimValidationError",
    "estimate_speed",
    "wrap_delta",
]

__version__ = "0.1.0"
