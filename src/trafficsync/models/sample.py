"""Derived speed sample."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SpeedSample:
    """One point of the tracked car's speed series, in pixels per second."""

    index: int
    value: float
