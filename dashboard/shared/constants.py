"""Shared constants for the traffic dashboard."""

from __future__ import annotations

ROAD_COLOR = "darkgray"
TRACKED_CAR_COLOR = "#1F4FD8"
CAR_COLOR = "#E10600"
SPEED_LINE_COLOR = "#1F4FD8"

TRACK_HEIGHT_PX = 500
ROAD_Y0_PX = 200
ROAD_Y1_PX = 280
CAR_Y_PX = 240

# Seconds between redraws of the live figures
REDRAW_INTERVAL = 0.25

PLOTLY_LAYOUT_DEFAULTS = dict(
    paper_bgcolor="rgba(0,0,0,0)",
    plot_bgcolor="white",
    margin=dict(l=40, r=20, t=40, b=40),
    showlegend=False,
)
