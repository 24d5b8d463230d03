"""Plotly figure builders for the track and the speed series."""

from __future__ import annotations

from collections.abc import Iterable

import plotly.graph_objects as go

from trafficsync import Car, SpeedSample, TrackGeometry

from .constants import (
    CAR_COLOR,
    CAR_Y_PX,
    PLOTLY_LAYOUT_DEFAULTS,
    ROAD_COLOR,
    ROAD_Y0_PX,
    ROAD_Y1_PX,
    SPEED_LINE_COLOR,
    TRACK_HEIGHT_PX,
    TRACKED_CAR_COLOR,
)


def build_track_figure(cars: Iterable[Car], geometry: TrackGeometry) -> go.Figure:
    """Draw the road band with one marker per positioned car."""
    placed = [car for car in cars if car.position is not None]
    fig = go.Figure()
    fig.add_shape(
        type="rect",
        x0=0, x1=geometry.width_px, y0=ROAD_Y0_PX, y1=ROAD_Y1_PX,
        fillcolor=ROAD_COLOR, line_width=0, layer="below",
    )
    fig.add_trace(go.Scatter(
        x=[geometry.to_pixels(car.position) for car in placed],
        y=[CAR_Y_PX] * len(placed),
        mode="markers",
        marker=dict(
            size=16,
            symbol="square",
            color=[TRACKED_CAR_COLOR if car.id == geometry.tracked_id else CAR_COLOR for car in placed],
        ),
        text=[f"car {car.id}" for car in placed],
        hovertemplate="%{text}<br>x=%{x:.1f} px<extra></extra>",
    ))
    fig.update_layout(
        **PLOTLY_LAYOUT_DEFAULTS,
        height=TRACK_HEIGHT_PX,
        xaxis=dict(range=[0, geometry.width_px], visible=False),
        yaxis=dict(range=[TRACK_HEIGHT_PX, 0], visible=False),
    )
    return fig


def build_speed_figure(samples: Iterable[SpeedSample]) -> go.Figure:
    """Line chart of the tracked car's speed per sample."""
    samples = list(samples)
    fig = go.Figure(go.Scatter(
        x=[s.index for s in samples],
        y=[s.value for s in samples],
        mode="lines",
        line=dict(color=SPEED_LINE_COLOR, width=2),
        hovertemplate="sample %{x}<br>%{y:.1f} px/s<extra></extra>",
    ))
    fig.update_layout(
        **PLOTLY_LAYOUT_DEFAULTS,
        height=220,
        xaxis=dict(title="sample", nticks=6, gridcolor="#DDDDDD", griddash="dash"),
        yaxis=dict(title="px/s", nticks=6, gridcolor="#DDDDDD", griddash="dash"),
    )
    return fig
