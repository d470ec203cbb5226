"""Simulated live metrics for the dashboard card."""

from metrics.simulator import MetricsSimulator, advance, next_delay, ticks

__all__ = ["MetricsSimulator", "advance", "next_delay", "ticks"]
