"""Errors raised while talking to the traffic simulation service.

Every transport or payload problem derives from ``TrafficSimError``;
``SyncSession`` turns these into a failed provisioning or a dropped tick.
"""

from __future__ import annotations


class TrafficSimError(Exception):
    """A simulation request did not produce a usable payload."""


class TrafficSimConnectionError(TrafficSimError):
    """The simulation service refused or dropped the connection."""


class TrafficSimTimeoutError(TrafficSimError):
    """A create or poll request got no answer in time.

    Also raised by the dashboard runtime when its polling loop does not
    return a result before the caller gives up.
    """


class TrafficSimAPIError(TrafficSimError):
    """The service answered ``POST /simulations`` or a poll with 4xx/5xx."""

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"HTTP {status_code}: {message}")


class TrafficSimValidationError(TrafficSimError):
    """The body was not JSON, or lacked ``Location``/``cars`` or a car's ``id``."""


class SessionNotProvisionedError(Exception):
    """A session was polled before any simulation was provisioned."""
