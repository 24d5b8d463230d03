"""Shared dashboard utilities."""

# --- Constants ---
from .constants import PLOTLY_LAYOUT_DEFAULTS, REDRAW_INTERVAL

# --- Figures ---
from .charts import build_speed_figure, build_track_figure

# --- Runtime ---
from .runtime import LiveRuntime, LiveView

__all__ = [
    "LiveRuntime",
    "LiveView",
    "PLOTLY_LAYOUT_DEFAULTS",
    "REDRAW_INTERVAL",
    "build_speed_figure",
    "build_track_figure",
]
