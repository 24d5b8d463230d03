"""Shared fixtures for dashboard tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from trafficsync import Car, SpeedSample

# Add dashboard to path so `shared` is importable
_dashboard_dir = str(Path(__file__).resolve().parent.parent.parent / "dashboard")
if _dashboard_dir not in sys.path:
    sys.path.insert(0, _dashboard_dir)


@pytest.fixture
def cars() -> list[Car]:
    return [
        Car(id=1, pos=[5.0, 1.0]),
        Car(id=2, pos=[12.5, 1.0]),
        Car(id=3, pos=[]),
    ]


@pytest.fixture
def samples() -> list[SpeedSample]:
    return [SpeedSample(index=i, value=float(10 * i)) for i in range(1, 6)]
