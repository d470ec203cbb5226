from __future__ import annotations

from models import InsightResult, InsightSource, SimulatedMetrics
from render_hints import (
    build_channels_hint,
    build_full_dashboard_hints,
    build_insight_hint,
    build_pipeline_hint,
    build_stats_hint,
    format_reach,
    format_roi,
)
from state import DashboardState, SelectionState


class TestStats:
    def test_seed_values_render_like_the_card(self) -> None:
        hint = build_stats_hint(SimulatedMetrics())
        values = {m["label"]: m["value"] for m in hint["metrics"]}

        assert values == {"Total Reach": "1.2M", "Avg. ROI": "4.2x", "Active Leads": "2.8k"}

    def test_formatting_drops_trailing_zeros(self) -> None:
        assert format_reach(1.21) == "1.21M"
        assert format_reach(1.3) == "1.3M"
        assert format_roi(4.3) == "4.3x"


class TestPipeline:
    def test_detail_for_default_stage(self) -> None:
        detail = build_pipeline_hint(SelectionState())["detail"]

        assert detail["heading"] == "Creation Status"
        assert detail["progress_label"] == "85% Complete"
        assert (detail["metric"], detail["metric_value"]) == ("Drafts", "12")

    def test_channels_only_on_distribution(self) -> None:
        selection = SelectionState()
        assert build_channels_hint(selection) is None

        selection.select_stage("dist")
        hint = build_channels_hint(selection)
        selected = [c["id"] for c in hint["channels"] if c["selected"]]

        assert len(hint["channels"]) == 5
        assert selected == ["x", "li"]


class TestInsight:
    def test_idle_button(self) -> None:
        hint = build_insight_hint(DashboardState())
        assert hint["button"] == {"label": "Generate Insight", "disabled": False}
        assert hint["title"] == "Gemini Optimization Insight"

    def test_pending_button(self) -> None:
        state = DashboardState()
        state.insight.in_flight = True

        hint = build_insight_hint(state)
        assert hint["pending"] is True
        assert hint["button"] == {"label": "Analyzing...", "disabled": True}

    def test_shows_latest_text(self) -> None:
        state = DashboardState()
        state.insight.apply(InsightResult("Post at 9am.", InsightSource.MODEL))

        hint = build_insight_hint(state)
        assert hint["text"] == "Post at 9am."
        assert hint["source"] == "model"


class TestFullDashboard:
    def test_block_order(self) -> None:
        state = DashboardState()
        types = [b["type"] for b in build_full_dashboard_hints(state)["render_hints"]]
        assert types == ["metrics_grid", "pipeline_status", "insight"]

        state.selection.select_stage("dist")
        types = [b["type"] for b in build_full_dashboard_hints(state)["render_hints"]]
        assert types == ["metrics_grid", "pipeline_status", "channel_picker", "insight"]

    def test_chrome(self) -> None:
        view = build_full_dashboard_hints(DashboardState())
        assert view["header"] == {"title": "CONTENTFLOW", "subtitle": "AI Marketing Suite"}
        assert view["footer"]["latency"] == "System Latency: 42ms"
        assert view["footer"]["version"] == "v2.4.0-Stable"
