"""Shared test fixtures and sample service responses."""

from __future__ import annotations

import logging

import pytest

BASE_URL = "http://localhost:8000"
LOCATION = "/simulations/6b1f0c2a"


SAMPLE_CREATED = {
    "Location": LOCATION,
    "cars": [
        {"id": 1, "pos": [5.0, 1.0]},
        {"id": 2, "pos": [12.5, 1.0]},
        {"id": 3, "pos": [20.0, 1.0]},
    ],
}

SAMPLE_SNAPSHOT = {
    "cars": [
        {"id": 1, "pos": [5.5, 1.0]},
        {"id": 2, "pos": [13.0, 1.0]},
        {"id": 3, "pos": [20.25, 1.0]},
    ],
}


def make_snapshot(position: float | None, car_id: int = 1) -> dict:
    """Snapshot payload with the given car at ``position`` (omitted if None)."""
    cars = [{"id": 9, "pos": [0.0, 1.0]}]
    if position is not None:
        cars.append({"id": car_id, "pos": [position, 1.0]})
    return {"cars": cars}


@pytest.fixture
def base_url() -> str:
    return BASE_URL


@pytest.fixture(autouse=True)
def _isolated_log(tmp_path):
    """Redirect the client's file logger to tmp_path."""
    import trafficsync._logging as mod

    old_logger = mod._logger
    old_dir = mod._LOG_DIR
    old_file = mod._LOG_FILE

    named_logger = logging.getLogger("trafficsync.api")
    named_logger.handlers.clear()

    mod._logger = None
    mod._LOG_DIR = str(tmp_path)
    mod._LOG_FILE = str(tmp_path / "api_calls.log")

    yield tmp_path

    for h in named_logger.handlers[:]:
        h.close()
        named_logger.removeHandler(h)
    mod._logger = old_logger
    mod._LOG_DIR = old_dir
    mod._LOG_FILE = old_file
