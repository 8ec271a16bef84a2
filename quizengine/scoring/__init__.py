"""Score aggregation for graded attempts."""

from .aggregator import ScoreReport, aggregate, percentage

__all__ = ["ScoreReport", "aggregate", "percentage"]
