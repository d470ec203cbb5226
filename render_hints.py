"""Render hints builder for the dashboard card.

Converts DashboardState into render_hints blocks that the inline frontend
in dashboard.py interprets and draws. Everything here is pure: no I/O and
no mutation of the state passed in.
"""

from __future__ import annotations

from typing import Any

from models import CHANNELS, STAGES, SimulatedMetrics, StageId, get_stage
from state import DashboardState, SelectionState

APP_TITLE = "CONTENTFLOW"
APP_SUBTITLE = "AI Marketing Suite"
APP_VERSION = "v2.4.0-Stable"
SYSTEM_LATENCY = "42ms"
INSIGHT_TITLE = "Gemini Optimization Insight"
ACTIVE_LEADS = "2.8k"


def format_reach(reach: float) -> str:
    return f"{reach:g}M"


def format_roi(roi: float) -> str:
    return f"{roi:g}x"


def build_stats_hint(metrics: SimulatedMetrics) -> dict:
    """Build a metrics_grid render hint for the three stat cards."""
    return {
        "type": "metrics_grid",
        "metrics": [
            {"label": "Total Reach", "value": format_reach(metrics.reach), "change": "12.5%", "color": "cyan", "trend": "up"},
            {"label": "Avg. ROI", "value": format_roi(metrics.roi), "change": "8.2%", "color": "purple", "trend": "up"},
            {"label": "Active Leads", "value": ACTIVE_LEADS, "change": "22.1%", "color": "pink", "trend": "up"},
        ],
    }


def build_pipeline_hint(selection: SelectionState) -> dict:
    """Build a pipeline_status render hint with the active stage's detail panel."""
    active = get_stage(selection.active_stage)
    return {
        "type": "pipeline_status",
        "title": "Campaign Pipeline",
        "live": True,
        "stages": [
            {
                "id": stage.id.value,
                "title": stage.title,
                "description": stage.description,
                "color": stage.color,
                "active": stage.id == active.id,
            }
            for stage in STAGES
        ],
        "detail": {
            "heading": f"{active.title} Status",
            "progress": active.progress,
            "progress_label": f"{active.progress}% Complete",
            "metric": active.metric,
            "metric_value": active.metric_value,
        },
    }


def build_channels_hint(selection: SelectionState) -> dict | None:
    """Channel toggles only appear while the Distribution stage is active."""
    if selection.active_stage != StageId.DIST:
        return None
    return {
        "type": "channel_picker",
        "title": "Target Distribution Channels",
        "channels": [
            {
                "id": channel.id,
                "name": channel.name,
                "color": channel.color,
                "selected": selection.is_selected(channel.id),
            }
            for channel in CHANNELS
        ],
    }


def build_insight_hint(state: DashboardState) -> dict:
    pending = state.insight.in_flight
    return {
        "type": "insight",
        "title": INSIGHT_TITLE,
        "text": state.insight.text,
        "source": state.insight.source.value,
        "pending": pending,
        "button": {"label": "Analyzing..." if pending else "Generate Insight", "disabled": pending},
    }


def build_full_dashboard_hints(state: DashboardState) -> dict[str, Any]:
    """All blocks for one render of the card, in display order."""
    blocks = [
        build_stats_hint(state.metrics),
        build_pipeline_hint(state.selection),
    ]
    channels = build_channels_hint(state.selection)
    if channels:
        blocks.append(channels)
    blocks.append(build_insight_hint(state))

    return {
        "header": {"title": APP_TITLE, "subtitle": APP_SUBTITLE},
        "footer": {"latency": f"System Latency: {SYSTEM_LATENCY}", "version": APP_VERSION},
        "render_hints": blocks,
    }
