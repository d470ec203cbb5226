"""Domain models: the fixed pipeline/channel catalogue and in-memory card state."""

from dataclasses import dataclass, field, asdict
from datetime import datetime, timezone
from enum import Enum


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StageId(str, Enum):
    """The four steps of the content pipeline, in display order."""

    IDEA = "idea"
    CREATE = "create"
    DIST = "dist"
    OPT = "opt"


class InsightSource(str, Enum):
    """Where the currently displayed insight text came from."""

    PLACEHOLDER = "placeholder"
    VALIDATION = "validation"
    MODEL = "model"
    FALLBACK_EMPTY = "fallback_empty"
    FALLBACK_ERROR = "fallback_error"


class UnknownStageError(KeyError):
    """Raised for a stage id outside the fixed pipeline."""


class UnknownChannelError(KeyError):
    """Raised for a channel id outside the fixed channel set."""


@dataclass(frozen=True)
class PipelineStage:
    id: StageId
    title: str
    description: str
    color: str
    progress: int  # 0-100, static per stage
    metric: str
    metric_value: str


@dataclass(frozen=True)
class Channel:
    id: str
    name: str
    color: str


STAGES: tuple[PipelineStage, ...] = (
    PipelineStage(StageId.IDEA, "Ideation", "AI-topic mapping", "cyan", 100, "Topics", "142"),
    PipelineStage(StageId.CREATE, "Creation", "Content generation", "purple", 85, "Drafts", "12"),
    PipelineStage(StageId.DIST, "Distribution", "Multi-channel", "pink", 40, "Reach", "85k"),
    PipelineStage(StageId.OPT, "Optimization", "ROI tracking", "emerald", 15, "Conv.", "3.2%"),
)

CHANNELS: tuple[Channel, ...] = (
    Channel("x", "X", "slate"),
    Channel("li", "LinkedIn", "blue"),
    Channel("ig", "Instagram", "pink"),
    Channel("fb", "Facebook", "indigo"),
    Channel("th", "Threads", "slate"),
)

_STAGES_BY_ID = {stage.id: stage for stage in STAGES}
_CHANNELS_BY_ID = {channel.id: channel for channel in CHANNELS}

DEFAULT_STAGE = StageId.CREATE
DEFAULT_CHANNELS = ("x", "li")

INITIAL_REACH = 1.2
INITIAL_ROI = 4.2

INSIGHT_PLACEHOLDER = "Select distribution channels and generate a tailored optimization strategy."


def parse_stage_id(stage_id: "StageId | str") -> StageId:
    """Coerce a raw id into a StageId, rejecting anything outside the pipeline."""
    if isinstance(stage_id, StageId):
        return stage_id
    try:
        return StageId(stage_id)
    except ValueError:
        raise UnknownStageError(stage_id) from None


def get_stage(stage_id: "StageId | str") -> PipelineStage:
    return _STAGES_BY_ID[parse_stage_id(stage_id)]


def get_channel(channel_id: str) -> Channel:
    try:
        return _CHANNELS_BY_ID[channel_id]
    except KeyError:
        raise UnknownChannelError(channel_id) from None


def is_known_channel(channel_id: str) -> bool:
    return channel_id in _CHANNELS_BY_ID


@dataclass
class SimulatedMetrics:
    """Live-updating headline stats. Both values only ever go up."""

    reach: float = INITIAL_REACH  # millions
    roi: float = INITIAL_ROI  # multiplier

    def to_dict(self) -> dict:
        return {"reach": self.reach, "roi": self.roi}


@dataclass(frozen=True)
class MetricsTick:
    """One simulator update: the new values, the raw draws, and the wait before the next one."""

    seq: int
    reach: float
    roi: float
    reach_step: float
    roi_step: float
    next_delay: float  # seconds
    at: datetime = field(default_factory=_utcnow)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["at"] = self.at.isoformat()
        return data


@dataclass(frozen=True)
class InsightResult:
    text: str
    source: InsightSource


@dataclass
class InsightState:
    text: str = INSIGHT_PLACEHOLDER
    in_flight: bool = False
    source: InsightSource = InsightSource.PLACEHOLDER
    updated_at: datetime | None = None

    def apply(self, result: InsightResult) -> None:
        self.text = result.text
        self.source = result.source
        self.updated_at = _utcnow()

    def to_dict(self) -> dict:
        return {
            "text": self.text,
            "in_flight": self.in_flight,
            "source": self.source.value,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
