"""End-to-end tests for the dashboard API, run in-process against the ASGI app."""

from __future__ import annotations

import httpx
import pytest
from fastapi.testclient import TestClient

from generators.insight import ERROR_FALLBACK, NO_CHANNELS_MESSAGE
from main import create_app
from models import INSIGHT_PLACEHOLDER
from tests.conftest import StubProvider, make_settings


def _hint(payload: dict, hint_type: str) -> dict | None:
    return next((h for h in payload["render_hints"] if h["type"] == hint_type), None)


@pytest.mark.asyncio
class TestHealthAndPage:
    async def test_health(self, client: httpx.AsyncClient) -> None:
        r = await client.get("/health")
        assert r.status_code == 200
        assert r.json()["status"] == "ok"
        assert r.json()["simulator_running"] is True

    async def test_dashboard_page(self, client: httpx.AsyncClient) -> None:
        r = await client.get("/")
        assert r.status_code == 200
        assert "text/html" in r.headers["content-type"]
        assert "CONTENTFLOW" in r.text

    async def test_provider_health(self, client: httpx.AsyncClient) -> None:
        r = await client.get("/api/providers/health")
        assert r.json() == {"llm": True, "llm_provider": "stub"}

    async def test_catalogue(self, client: httpx.AsyncClient) -> None:
        data = (await client.get("/api/catalogue")).json()
        assert [s["id"] for s in data["stages"]] == ["idea", "create", "dist", "opt"]
        assert [c["name"] for c in data["channels"]] == ["X", "LinkedIn", "Instagram", "Facebook", "Threads"]


@pytest.mark.asyncio
class TestDashboardState:
    async def test_defaults(self, client: httpx.AsyncClient) -> None:
        data = (await client.get("/api/dashboard")).json()

        assert data["selection"] == {"active_stage": "create", "selected_channels": ["x", "li"]}
        assert data["insight"]["text"] == INSIGHT_PLACEHOLDER
        assert data["insight"]["in_flight"] is False
        assert data["header"]["title"] == "CONTENTFLOW"

    async def test_metrics_running(self, client: httpx.AsyncClient) -> None:
        data = (await client.get("/api/metrics")).json()
        assert data["reach"] >= 1.2
        assert data["roi"] >= 4.2
        assert data["ticks"] >= 1

    async def test_select_stage(self, client: httpx.AsyncClient) -> None:
        r = await client.post("/api/stages/dist")
        assert r.status_code == 200
        data = r.json()

        assert data["selection"]["active_stage"] == "dist"
        active = [s["id"] for s in _hint(data, "pipeline_status")["stages"] if s["active"]]
        assert active == ["dist"]
        assert _hint(data, "channel_picker") is not None

        data = (await client.post("/api/stages/opt")).json()
        active = [s["id"] for s in _hint(data, "pipeline_status")["stages"] if s["active"]]
        assert active == ["opt"]
        assert _hint(data, "channel_picker") is None

    async def test_unknown_stage(self, client: httpx.AsyncClient) -> None:
        r = await client.post("/api/stages/launch")
        assert r.status_code == 404
        data = (await client.get("/api/dashboard")).json()
        assert data["selection"]["active_stage"] == "create"

    async def test_toggle_scenario(self, client: httpx.AsyncClient) -> None:
        data = (await client.post("/api/channels/ig/toggle")).json()
        assert data["selection"]["selected_channels"] == ["x", "li", "ig"]

        data = (await client.post("/api/channels/x/toggle")).json()
        assert data["selection"]["selected_channels"] == ["li", "ig"]

    async def test_unknown_channel(self, client: httpx.AsyncClient) -> None:
        r = await client.post("/api/channels/myspace/toggle")
        assert r.status_code == 404


@pytest.mark.asyncio
class TestInsightEndpoint:
    async def test_generates_from_provider(self, client: httpx.AsyncClient, stub_provider: StubProvider) -> None:
        r = await client.post("/api/insight")
        assert r.status_code == 200
        data = r.json()

        assert data["insight"]["text"] == "Pair X threads with LinkedIn carousels."
        assert data["insight"]["source"] == "model"
        assert data["insight"]["in_flight"] is False
        assert _hint(data, "insight")["button"]["label"] == "Generate Insight"
        assert len(stub_provider.calls) == 1
        assert "X, LinkedIn" in stub_provider.calls[0]["user_prompt"]

    async def test_no_channels(self, client: httpx.AsyncClient, stub_provider: StubProvider) -> None:
        await client.post("/api/channels/x/toggle")
        await client.post("/api/channels/li/toggle")

        data = (await client.post("/api/insight")).json()
        assert data["insight"]["text"] == NO_CHANNELS_MESSAGE
        assert stub_provider.calls == []

    async def test_service_failure(self, client: httpx.AsyncClient, stub_provider: StubProvider) -> None:
        stub_provider.error = httpx.ConnectError("offline")

        r = await client.post("/api/insight")
        assert r.status_code == 200
        assert r.json()["insight"]["text"] == ERROR_FALLBACK

    async def test_rejected_while_pending(self, client: httpx.AsyncClient, app) -> None:
        app.state.dashboard.insight.in_flight = True

        r = await client.post("/api/insight")
        assert r.status_code == 409


class TestMetricsWebSocket:
    def test_streams_ticks(self) -> None:
        app = create_app(make_settings(), provider=StubProvider())

        with TestClient(app) as tc:
            with tc.websocket_connect("/ws/metrics") as ws:
                first = ws.receive_json()
                tick = ws.receive_json()

        assert first["type"] == "metrics"
        assert first["reach"] >= 1.2
        assert tick["type"] == "tick"
        assert tick["seq"] >= 1
        assert tick["reach"] >= first["reach"]
        assert 0.01 <= tick["next_delay"] < 0.02

    def test_lifespan_stops_simulator(self) -> None:
        app = create_app(make_settings(), provider=StubProvider())

        with TestClient(app):
            simulator = app.state.simulator
            assert simulator.running
        assert not simulator.running
