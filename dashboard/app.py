"""Traffic Simulation Dashboard: Streamlit + Plotly live view of a remote simulation."""

from __future__ import annotations

import os

import streamlit as st

from trafficsync._http import DEFAULT_BASE_URL
from trafficsync.track import DEFAULT_RATE_HZ, MAX_RATE_HZ, MIN_RATE_HZ

from shared import REDRAW_INTERVAL, LiveRuntime, build_speed_figure, build_track_figure

# ── Page config ──────────────────────────────────────────────────────────────

st.set_page_config(
    page_title="Traffic Simulation",
    page_icon="\U0001f697",
    layout="wide",
)


@st.cache_resource
def get_runtime() -> LiveRuntime:
    return LiveRuntime(base_url=os.environ.get("TRAFFICSYNC_BASE_URL", DEFAULT_BASE_URL))


runtime = get_runtime()

st.title("Traffic Simulation")


# ── Controls ─────────────────────────────────────────────────────────────────

setup_col, start_col, stop_col, rate_col = st.columns([1, 1, 1, 3])

if setup_col.button("Setup"):
    if not runtime.setup():
        st.warning("Could not create a simulation. Is the service running?")

controls = runtime.view()

if start_col.button("Start", disabled=not controls.is_provisioned):
    runtime.start()

if stop_col.button("Stop"):
    runtime.stop()

rate_hz = rate_col.number_input(
    "Rate (Hz)",
    min_value=MIN_RATE_HZ,
    max_value=MAX_RATE_HZ,
    value=DEFAULT_RATE_HZ,
    step=1,
)
if rate_hz != controls.rate_hz:
    runtime.set_rate(rate_hz)


# ── Live view ────────────────────────────────────────────────────────────────


@st.fragment(run_every=REDRAW_INTERVAL)
def live_view() -> None:
    view = runtime.view()
    status = "running" if view.is_running else "stopped"
    st.caption(f"{view.location or 'no simulation'} | {status} at {view.rate_hz:g} Hz")

    st.plotly_chart(
        build_track_figure(view.cars, runtime.geometry),
        use_container_width=True,
    )

    st.subheader("Tracked car speed")
    st.plotly_chart(build_speed_figure(view.samples), use_container_width=True)


live_view()
