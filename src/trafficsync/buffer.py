"""Bounded FIFO window of speed samples."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator

from trafficsync.models.sample import SpeedSample
from trafficsync.track import SAMPLE_CAPACITY


class SampleWindow:
    """Holds the most recent ``capacity`` samples in arrival order.

    Appending past capacity evicts from the front.
    """

    def __init__(self, capacity: int = SAMPLE_CAPACITY) -> None:
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self._samples: deque[SpeedSample] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._samples.maxlen  # type: ignore[return-value]

    def append(self, sample: SpeedSample) -> None:
        self._samples.append(sample)

    def reset(self) -> None:
        self._samples.clear()

    @property
    def latest(self) -> SpeedSample | None:
        return self._samples[-1] if self._samples else None

    def to_list(self) -> list[SpeedSample]:
        """Return a copy of the current samples, oldest first."""
        return list(self._samples)

    def __iter__(self) -> Iterator[SpeedSample]:
        return iter(self.to_list())

    def __len__(self) -> int:
        return len(self._samples)

    def __repr__(self) -> str:
        return f"SampleWindow(len={len(self)}, capacity={self.capacity})"
