"""Speed estimation on a periodic one-dimensional track."""

from __future__ import annotations


def wrap_delta(prev: float, curr: float, extent: float) -> float:
    """Return the shortest signed arc from ``prev`` to ``curr`` on a ring.

    Deltas of exactly ``+extent/2`` or ``-extent/2`` are left as-is.

    Args:
        prev: Previous position in model units.
        curr: Current position in model units.
        extent: Ring circumference in model units; must be positive.

    Raises:
        ValueError: If ``extent`` is not positive.
    """
    if extent <= 0:
        raise ValueError(f"extent must be positive, got {extent}")
    dx = curr - prev
    half = extent / 2
    if dx < -half:
        dx += extent
    if dx > half:
        dx -= extent
    return dx


def estimate_speed(
    prev: float,
    curr: float,
    extent: float,
    scale: float,
    rate: float,
) -> float:
    """Estimate speed in pixels per second from two consecutive positions.

    ``scale`` converts model units to pixels and ``rate`` is the number of
    ticks per second, so ``dx * scale * rate`` is px/s.
    """
    return wrap_delta(prev, curr, extent) * scale * rate
