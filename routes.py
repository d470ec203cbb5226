"""FastAPI routes for the dashboard card API."""

import asyncio
import json
import logging

from fastapi import APIRouter, HTTPException, WebSocket, WebSocketDisconnect

from generators.insight import InsightGenerator
from metrics.simulator import MetricsSimulator
from models import CHANNELS, STAGES, UnknownChannelError, UnknownStageError
from providers.factory import check_llm_provider
from render_hints import build_full_dashboard_hints
from state import DashboardState, InsightInFlightError

logger = logging.getLogger(__name__)
router = APIRouter()

APP_VERSION = "2.4.0"

# These get set by main.py during startup
_state: DashboardState | None = None
_simulator: MetricsSimulator | None = None
_generator: InsightGenerator | None = None


def set_dashboard(state: DashboardState, simulator: MetricsSimulator, generator: InsightGenerator):
    global _state, _simulator, _generator
    _state = state
    _simulator = simulator
    _generator = generator


def _require_state() -> DashboardState:
    if _state is None:
        raise HTTPException(status_code=503, detail="Dashboard not initialized")
    return _state


def _dashboard_payload(state: DashboardState) -> dict:
    payload = state.snapshot()
    payload.update(build_full_dashboard_hints(state))
    return payload


# ── Health ──────────────────────────────────────────────

@router.get("/health")
async def health():
    return {
        "status": "ok",
        "version": APP_VERSION,
        "simulator_running": bool(_simulator and _simulator.running),
    }


@router.get("/api/providers/health")
async def providers_health():
    provider = _generator.provider if _generator else None
    return await check_llm_provider(provider)


# ── Card state ──────────────────────────────────────────

@router.get("/api/dashboard")
async def get_dashboard():
    return _dashboard_payload(_require_state())


@router.get("/api/catalogue")
async def get_catalogue():
    """The fixed stages and channels, for clients that draw their own card."""
    return {
        "stages": [
            {
                "id": s.id.value, "title": s.title, "description": s.description, "color": s.color,
                "progress": s.progress, "metric": s.metric, "metric_value": s.metric_value,
            }
            for s in STAGES
        ],
        "channels": [{"id": c.id, "name": c.name, "color": c.color} for c in CHANNELS],
    }


@router.get("/api/metrics")
async def get_metrics():
    state = _require_state()
    data = state.metrics.to_dict()
    data["ticks"] = _simulator.tick_count if _simulator else 0
    return data


@router.post("/api/stages/{stage_id}")
async def activate_stage(stage_id: str):
    state = _require_state()
    try:
        state.selection.select_stage(stage_id)
    except UnknownStageError:
        raise HTTPException(status_code=404, detail=f"Unknown stage: {stage_id}")
    return _dashboard_payload(state)


@router.post("/api/channels/{channel_id}/toggle")
async def toggle_channel(channel_id: str):
    state = _require_state()
    try:
        state.selection.toggle_channel(channel_id)
    except UnknownChannelError:
        raise HTTPException(status_code=404, detail=f"Unknown channel: {channel_id}")
    return _dashboard_payload(state)


@router.post("/api/insight")
async def generate_insight():
    state = _require_state()
    if _generator is None:
        raise HTTPException(status_code=503, detail="Insight generator not initialized")
    try:
        await state.request_insight(_generator)
    except InsightInFlightError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _dashboard_payload(state)


# ── WebSocket metrics stream ────────────────────────────

async def _forward_ticks(websocket: WebSocket, queue) -> None:
    while True:
        tick = await queue.get()
        await websocket.send_text(json.dumps({"type": "tick", **tick.to_dict()}))


@router.websocket("/ws/metrics")
async def websocket_metrics(websocket: WebSocket):
    """Push every simulator tick to the client until it disconnects."""
    await websocket.accept()
    state = _state
    simulator = _simulator
    if state is None or simulator is None:
        await websocket.close(code=1011)
        return

    queue = simulator.subscribe()
    forwarder: asyncio.Task | None = None
    try:
        await websocket.send_text(json.dumps({"type": "metrics", **state.metrics.to_dict()}))
        forwarder = asyncio.create_task(_forward_ticks(websocket, queue))
        while True:
            # Client messages carry nothing; reading them surfaces the disconnect
            await websocket.receive_text()
    except WebSocketDisconnect:
        logger.debug("Metrics WebSocket closed")
    finally:
        if forwarder is not None:
            forwarder.cancel()
            await asyncio.gather(forwarder, return_exceptions=True)
        simulator.unsubscribe(queue)
