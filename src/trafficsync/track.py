"""Track geometry and polling-rate defaults."""

from __future__ import annotations

from dataclasses import dataclass

EXTENT_X = 25.0
SCALE_PX = 32.0
BLUE_ID = 1

SAMPLE_CAPACITY = 200

DEFAULT_RATE_HZ = 10
MIN_RATE_HZ = 1
MAX_RATE_HZ = 60


@dataclass(frozen=True)
class TrackGeometry:
    """Periodic track description used to turn positions into speeds.

    Usage:
        TrackGeometry()                    # 25-unit ring, 32 px per unit, car 1 tracked
        TrackGeometry(extent=50, scale=16)
    """

    extent: float = EXTENT_X
    scale: float = SCALE_PX
    tracked_id: int = BLUE_ID

    def __post_init__(self) -> None:
        if self.extent <= 0:
            raise ValueError(f"Track extent must be positive, got {self.extent}")

    def to_pixels(self, position: float) -> float:
        """Convert a model-space position to a pixel offset."""
        return position * self.scale

    @property
    def width_px(self) -> float:
        return self.extent * self.scale
