"""Vehicle model for a single car on the periodic track."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Car(BaseModel):
    """A car and its model-space coordinates.

    Only ``pos[0]`` is meaningful on the one-dimensional track.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    pos: list[float] = []

    @property
    def position(self) -> float | None:
        """Model-space position along the track, or None if unreported."""
        return self.pos[0] if self.pos else None
