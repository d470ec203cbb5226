"""In-process state for the dashboard card: selections, live metrics, insight box."""

import logging
from dataclasses import dataclass, field

from generators.insight import InsightGenerator
from models import (
    DEFAULT_CHANNELS,
    DEFAULT_STAGE,
    InsightState,
    PipelineStage,
    SimulatedMetrics,
    StageId,
    get_channel,
    get_stage,
    parse_stage_id,
)

logger = logging.getLogger(__name__)


class InsightInFlightError(RuntimeError):
    """An insight request is already pending for this card."""


@dataclass
class SelectionState:
    """Active pipeline stage plus the set of selected channels.

    Channels keep the order they were selected in, which is also the order
    their names appear in the insight prompt.
    """

    active_stage: StageId = DEFAULT_STAGE
    selected_channels: list[str] = field(default_factory=lambda: list(DEFAULT_CHANNELS))

    def select_stage(self, stage_id: "StageId | str") -> PipelineStage:
        stage = get_stage(parse_stage_id(stage_id))
        self.active_stage = stage.id
        return stage

    def toggle_channel(self, channel_id: str) -> list[str]:
        get_channel(channel_id)  # validates
        if channel_id in self.selected_channels:
            self.selected_channels.remove(channel_id)
        else:
            self.selected_channels.append(channel_id)
        return list(self.selected_channels)

    def is_selected(self, channel_id: str) -> bool:
        return channel_id in self.selected_channels

    def to_dict(self) -> dict:
        return {
            "active_stage": self.active_stage.value,
            "selected_channels": list(self.selected_channels),
        }


class DashboardState:
    """Everything the card shows. One instance per running app."""

    def __init__(self, metrics: SimulatedMetrics | None = None):
        self.selection = SelectionState()
        self.metrics = metrics or SimulatedMetrics()
        self.insight = InsightState()

    async def request_insight(self, generator: InsightGenerator) -> InsightState:
        """Run one insight request, guarding against overlapping requests."""
        if self.insight.in_flight:
            raise InsightInFlightError("Insight generation already in progress")

        self.insight.in_flight = True
        try:
            result = await generator.generate(list(self.selection.selected_channels))
            self.insight.apply(result)
            logger.info("Insight updated (source=%s)", result.source.value)
        finally:
            self.insight.in_flight = False
        return self.insight

    def snapshot(self) -> dict:
        return {
            "selection": self.selection.to_dict(),
            "metrics": self.metrics.to_dict(),
            "insight": self.insight.to_dict(),
        }
