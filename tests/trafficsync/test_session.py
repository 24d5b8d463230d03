"""Tests for SyncSession provisioning and per-tick refresh."""

from __future__ import annotations

import asyncio

import httpx
import pytest
import respx

from trafficsync import (
    AsyncTrafficSimClient,
    SessionNotProvisionedError,
    SimulationCreated,
    Snapshot,
    SpeedSample,
    SyncSession,
    TrackGeometry,
    TrafficSimConnectionError,
    TrafficSimValidationError,
)
from tests.conftest import BASE_URL, LOCATION, SAMPLE_CREATED, make_snapshot


class FakeClient:
    """Stands in for AsyncTrafficSimClient, replaying queued payloads."""

    def __init__(self, created: dict | Exception = SAMPLE_CREATED, snapshots=()) -> None:
        self.created = created
        self.snapshots = list(snapshots)
        self.polled: list[str] = []
        self.gate: asyncio.Event | None = None

    async def create_simulation(self) -> SimulationCreated:
        if isinstance(self.created, Exception):
            raise self.created
        return SimulationCreated.model_validate(self.created)

    async def snapshot(self, location: str) -> Snapshot:
        self.polled.append(location)
        if self.gate is not None:
            await self.gate.wait()
        item = self.snapshots.pop(0)
        if isinstance(item, Exception):
            raise item
        return Snapshot.model_validate(item)


def _created(position: float | None, location: str = LOCATION) -> dict:
    return {"Location": location, **make_snapshot(position)}


async def _provisioned(*positions) -> tuple[SyncSession, FakeClient]:
    """Session provisioned with car 1 at 5.0, queued to poll ``positions``."""
    client = FakeClient(_created(5.0), [make_snapshot(p) for p in positions])
    session = SyncSession(client)
    assert await session.provision()
    return session, client


class TestProvision:
    @pytest.mark.asyncio
    async def test_success_stores_location_and_seeds_position(self) -> None:
        session = SyncSession(FakeClient())
        assert not session.is_provisioned

        assert await session.provision() is True
        assert session.is_provisioned
        assert session.location == LOCATION
        assert [car.id for car in session.cars] == [1, 2, 3]
        assert session.previous_position == 5.0
        assert session.tracked_car.id == 1
        assert len(session.samples) == 0
        assert session.sample_count == 0

    @pytest.mark.asyncio
    async def test_without_tracked_car_leaves_position_unset(self) -> None:
        session = SyncSession(FakeClient(_created(None)))
        assert await session.provision()
        assert session.previous_position is None
        assert session.tracked_car is None

    @pytest.mark.asyncio
    async def test_failure_leaves_unprovisioned(self) -> None:
        session = SyncSession(FakeClient(TrafficSimConnectionError("refused")))
        assert await session.provision() is False
        assert not session.is_provisioned
        assert session.location is None
        assert session.cars == []

    @pytest.mark.asyncio
    async def test_failure_keeps_prior_state(self) -> None:
        session, client = await _provisioned(5.5)
        await session.refresh(rate_hz=10)

        client.created = TrafficSimValidationError("bad payload")
        assert await session.provision() is False
        assert session.location == LOCATION
        assert session.previous_position == 5.5
        assert session.samples.to_list() == [SpeedSample(1, 160.0)]

    @pytest.mark.asyncio
    async def test_reprovision_resets_series(self) -> None:
        session, client = await _provisioned(5.5, 6.0)
        await session.refresh(rate_hz=10)
        await session.refresh(rate_hz=10)
        assert session.sample_count == 2

        client.created = _created(10.0, location="/simulations/second")
        client.snapshots = [make_snapshot(10.5)]
        assert await session.provision()
        assert session.location == "/simulations/second"
        assert len(session.samples) == 0
        assert session.previous_position == 10.0

        await session.refresh(rate_hz=10)
        assert session.samples.to_list() == [SpeedSample(1, pytest.approx(160.0))]
        assert client.polled[-1] == "/simulations/second"

    @pytest.mark.asyncio
    async def test_logs_failure(self, _isolated_log) -> None:
        session = SyncSession(FakeClient(TrafficSimConnectionError("refused")))
        await session.provision()
        content = (_isolated_log / "api_calls.log").read_text()
        assert "Provisioning failed: TrafficSimConnectionError: refused" in content


class TestRefresh:
    @pytest.mark.asyncio
    async def test_before_provision_raises(self) -> None:
        session = SyncSession(FakeClient())
        with pytest.raises(SessionNotProvisionedError):
            await session.refresh(rate_hz=10)

    @pytest.mark.asyncio
    async def test_first_refresh_uses_seed(self) -> None:
        session, _ = await _provisioned(5.5)
        assert await session.refresh(rate_hz=10) is True
        assert session.samples.to_list() == [SpeedSample(1, pytest.approx(160.0))]
        assert session.previous_position == 5.5

    @pytest.mark.asyncio
    async def test_repeated_seed_snapshot_emits_nothing(self) -> None:
        session, _ = await _provisioned(5.0, 5.5)
        await session.refresh(rate_hz=10)
        assert len(session.samples) == 0
        assert session.previous_position == 5.0

        await session.refresh(rate_hz=10)
        assert session.samples.to_list() == [SpeedSample(1, pytest.approx(160.0))]

    @pytest.mark.asyncio
    async def test_stationary_car_after_first_tick_yields_zero(self) -> None:
        session, _ = await _provisioned(5.5, 5.5)
        await session.refresh(rate_hz=10)
        await session.refresh(rate_hz=10)
        assert [s.value for s in session.samples] == [pytest.approx(160.0), 0.0]

    @pytest.mark.asyncio
    async def test_unseeded_first_sighting_only_records_position(self) -> None:
        client = FakeClient(_created(None), [make_snapshot(3.0), make_snapshot(3.25)])
        session = SyncSession(client)
        await session.provision()

        await session.refresh(rate_hz=10)
        assert len(session.samples) == 0
        assert session.previous_position == 3.0

        await session.refresh(rate_hz=10)
        assert session.samples.to_list() == [SpeedSample(1, pytest.approx(80.0))]

    @pytest.mark.asyncio
    async def test_tracked_car_absent(self) -> None:
        session, _ = await _provisioned(None)
        assert await session.refresh(rate_hz=10) is True
        assert [car.id for car in session.cars] == [9]
        assert session.previous_position == 5.0
        assert len(session.samples) == 0

    @pytest.mark.asyncio
    async def test_tracked_car_without_position_is_absent(self) -> None:
        client = FakeClient(snapshots=[{"cars": [{"id": 1, "pos": []}]}])
        session = SyncSession(client)
        await session.provision()
        await session.refresh(rate_hz=10)
        assert session.previous_position == 5.0
        assert len(session.samples) == 0

    @pytest.mark.asyncio
    async def test_failure_drops_tick(self, _isolated_log) -> None:
        client = FakeClient(snapshots=[TrafficSimConnectionError("refused")])
        session = SyncSession(client)
        await session.provision()
        cars_before = session.cars

        assert await session.refresh(rate_hz=10) is False
        assert session.cars == cars_before
        assert session.previous_position == 5.0
        assert len(session.samples) == 0
        content = (_isolated_log / "api_calls.log").read_text()
        assert f"Dropped tick for {LOCATION}" in content

    @pytest.mark.asyncio
    async def test_indices_are_consecutive(self) -> None:
        positions = [5.0 + 0.25 * i for i in range(1, 31)]
        # gaps in the tracked car's presence do not skip indices
        positions[10] = None
        positions[20] = None
        session, _ = await _provisioned(*positions)
        for _ in positions:
            await session.refresh(rate_hz=10)
        indices = [s.index for s in session.samples]
        assert indices == list(range(1, 29))
        assert session.sample_count == 28

    @pytest.mark.asyncio
    async def test_window_is_bounded(self) -> None:
        client = FakeClient(snapshots=[make_snapshot(5.0 + i) for i in range(1, 6)])
        session = SyncSession(client, capacity=3)
        await session.provision()
        for _ in range(5):
            await session.refresh(rate_hz=1)
        assert [s.index for s in session.samples] == [3, 4, 5]

    @pytest.mark.asyncio
    async def test_uses_session_geometry(self) -> None:
        geometry = TrackGeometry(extent=10, scale=2, tracked_id=9)
        client = FakeClient(
            {"Location": LOCATION, "cars": [{"id": 9, "pos": [9.5]}]},
            [{"cars": [{"id": 9, "pos": [0.5]}]}],
        )
        session = SyncSession(client, geometry)
        await session.provision()
        await session.refresh(rate_hz=4)
        # 9.5 -> 0.5 on a 10 ring is +1 unit
        assert session.samples.latest.value == pytest.approx(1 * 2 * 4)

    @pytest.mark.asyncio
    async def test_stale_response_discarded(self) -> None:
        session, client = await _provisioned(7.0)
        client.gate = asyncio.Event()
        pending = asyncio.create_task(session.refresh(rate_hz=10))
        await asyncio.sleep(0)

        client.created = _created(20.0, location="/simulations/second")
        assert await session.provision()
        client.gate.set()

        assert await pending is False
        assert len(session.samples) == 0
        assert session.previous_position == 20.0


class TestEndToEnd:
    @respx.mock
    @pytest.mark.asyncio
    async def test_wrapped_speed_series(self) -> None:
        respx.post(f"{BASE_URL}/simulations").mock(
            return_value=httpx.Response(201, json={"Location": LOCATION, "cars": [{"id": 1, "pos": [5]}]})
        )
        respx.get(f"{BASE_URL}{LOCATION}").mock(side_effect=[
            httpx.Response(200, json={"cars": [{"id": 1, "pos": [5.5]}]}),
            httpx.Response(200, json={"cars": [{"id": 1, "pos": [24.7]}]}),
        ])
        async with AsyncTrafficSimClient() as sim:
            session = SyncSession(sim, TrackGeometry(extent=25, scale=32, tracked_id=1))
            assert await session.provision()
            assert await session.refresh(rate_hz=10)
            assert await session.refresh(rate_hz=10)

        samples = session.samples.to_list()
        assert [s.index for s in samples] == [1, 2]
        assert samples[0].value == pytest.approx(160.0)
        assert samples[1].value == pytest.approx(-1856.0)

    @respx.mock
    @pytest.mark.asyncio
    async def test_server_error_is_a_dropped_tick(self) -> None:
        respx.post(f"{BASE_URL}/simulations").mock(
            return_value=httpx.Response(201, json=SAMPLE_CREATED)
        )
        respx.get(f"{BASE_URL}{LOCATION}").mock(side_effect=[
            httpx.Response(500, text="boom"),
            httpx.Response(200, json={"cars": [{"id": 1, "pos": [6.0]}]}),
        ])
        async with AsyncTrafficSimClient() as sim:
            session = SyncSession(sim)
            await session.provision()
            assert await session.refresh(rate_hz=10) is False
            assert await session.refresh(rate_hz=10) is True

        assert session.samples.to_list() == [SpeedSample(1, pytest.approx(320.0))]


class TestTransitions:
    def test_apply_without_network(self) -> None:
        session = SyncSession(FakeClient())
        session.apply_provisioned(SimulationCreated.model_validate(SAMPLE_CREATED))

        first = session.apply_snapshot(Snapshot.model_validate(make_snapshot(5.5)), rate_hz=10)
        second = session.apply_snapshot(Snapshot.model_validate(make_snapshot(None)), rate_hz=10)

        assert first == SpeedSample(1, pytest.approx(160.0))
        assert second is None
        assert session.samples.latest is first
