"""Metrics simulator: nudges reach/ROI upward on a jittered cadence.

The first update fires as soon as the simulator starts; every later update is
scheduled a random 2-4 seconds after the previous one finished, so updates
never overlap. The running loop is a single asyncio task owned by the
simulator and cancelled in ``stop()``.
"""

import asyncio
import logging
import random
from collections.abc import Awaitable, Callable, Iterator

from models import MetricsTick, SimulatedMetrics

logger = logging.getLogger(__name__)

REACH_STEP_MAX = 0.01
ROI_STEP_MAX = 0.05
REACH_DECIMALS = 2
ROI_DECIMALS = 1

DEFAULT_MIN_DELAY = 2.0
DEFAULT_MAX_DELAY = 4.0

SUBSCRIBER_QUEUE_SIZE = 32


def advance(metrics: SimulatedMetrics, rng: random.Random) -> tuple[float, float]:
    """Apply one update in place. Returns the raw (unrounded) increments drawn."""
    reach_step = rng.random() * REACH_STEP_MAX
    roi_step = rng.random() * ROI_STEP_MAX
    metrics.reach = round(metrics.reach + reach_step, REACH_DECIMALS)
    metrics.roi = round(metrics.roi + roi_step, ROI_DECIMALS)
    return reach_step, roi_step


def next_delay(
    rng: random.Random,
    min_delay: float = DEFAULT_MIN_DELAY,
    max_delay: float = DEFAULT_MAX_DELAY,
) -> float:
    """Random wait in [min_delay, max_delay) seconds."""
    return min_delay + rng.random() * (max_delay - min_delay)


def ticks(
    metrics: SimulatedMetrics,
    rng: random.Random | None = None,
    min_delay: float = DEFAULT_MIN_DELAY,
    max_delay: float = DEFAULT_MAX_DELAY,
) -> Iterator[MetricsTick]:
    """Endless lazy sequence of updates. Each ``next()`` mutates ``metrics``."""
    rng = rng or random.Random()
    seq = 0
    while True:
        seq += 1
        reach_step, roi_step = advance(metrics, rng)
        yield MetricsTick(
            seq=seq,
            reach=metrics.reach,
            roi=metrics.roi,
            reach_step=reach_step,
            roi_step=roi_step,
            next_delay=next_delay(rng, min_delay, max_delay),
        )


class MetricsSimulator:
    """Owns the periodic update task for one ``SimulatedMetrics`` instance.

    Usage:
        simulator = MetricsSimulator(state.metrics)
        simulator.start()
        ...
        await simulator.stop()
    """

    def __init__(
        self,
        metrics: SimulatedMetrics,
        rng: random.Random | None = None,
        min_delay: float = DEFAULT_MIN_DELAY,
        max_delay: float = DEFAULT_MAX_DELAY,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        if min_delay < 0 or max_delay < min_delay:
            raise ValueError(f"Invalid delay range [{min_delay}, {max_delay})")
        self.metrics = metrics
        self.rng = rng or random.Random()
        self.min_delay = min_delay
        self.max_delay = max_delay
        self._sleep = sleep
        self._task: asyncio.Task | None = None
        self._subscribers: set[asyncio.Queue] = set()
        self.tick_count = 0
        self.last_tick: MetricsTick | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Begin a new update sequence on the running event loop."""
        if self.running:
            logger.warning("Metrics simulator already running, ignoring start()")
            return
        self._task = asyncio.create_task(self._run(), name="metrics-simulator")
        logger.info(
            "Metrics simulator started (reach=%.2f, roi=%.1f, jitter %.1f-%.1fs)",
            self.metrics.reach, self.metrics.roi, self.min_delay, self.max_delay,
        )

    async def stop(self) -> None:
        """Cancel the pending update. No update is applied after this returns."""
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        await asyncio.gather(task, return_exceptions=True)
        logger.info("Metrics simulator stopped after %d ticks", self.tick_count)

    def subscribe(self) -> asyncio.Queue:
        """Register a consumer queue that receives every future tick."""
        queue: asyncio.Queue = asyncio.Queue(maxsize=SUBSCRIBER_QUEUE_SIZE)
        self._subscribers.add(queue)
        return queue

    def unsubscribe(self, queue: asyncio.Queue) -> None:
        self._subscribers.discard(queue)

    async def _run(self) -> None:
        for tick in ticks(self.metrics, self.rng, self.min_delay, self.max_delay):
            self.tick_count += 1
            self.last_tick = tick
            logger.debug("Metrics tick %d: reach=%.2f roi=%.1f", tick.seq, tick.reach, tick.roi)
            self._publish(tick)
            await self._sleep(tick.next_delay)

    def _publish(self, tick: MetricsTick) -> None:
        for queue in self._subscribers:
            if queue.full():
                # Slow consumer: keep the newest ticks
                queue.get_nowait()
            queue.put_nowait(tick)

    def get_status(self) -> dict:
        return {
            "running": self.running,
            "ticks": self.tick_count,
            "subscribers": len(self._subscribers),
            "last_tick": self.last_tick.to_dict() if self.last_tick else None,
        }
