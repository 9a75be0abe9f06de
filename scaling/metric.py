"""
scaling/metric.py

Metric reference consumed by step scaling alarms and actions.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Mapping

from scaling.errors import UnsupportedStatisticError


class MetricAggregationType(str, Enum):
    """How a scaling action aggregates the metric data points."""

    AVERAGE = "Average"
    MINIMUM = "Minimum"
    MAXIMUM = "Maximum"


_STATISTIC_ALIASES: dict[str, MetricAggregationType] = {
    "average": MetricAggregationType.AVERAGE,
    "avg": MetricAggregationType.AVERAGE,
    "minimum": MetricAggregationType.MINIMUM,
    "min": MetricAggregationType.MINIMUM,
    "maximum": MetricAggregationType.MAXIMUM,
    "max": MetricAggregationType.MAXIMUM,
}


@dataclass(frozen=True)
class Metric:
    """
    Reference to a time-series signal and the statistic applied to it.
    """

    namespace: str
    metric_name: str
    statistic: str = "Average"
    dimensions: Mapping[str, str] = field(default_factory=dict)
    period_sec: int = 300

    def with_period(self, period_sec: int) -> Metric:
        """Return a copy of this metric evaluated over *period_sec* seconds."""
        return replace(self, period_sec=period_sec)


def aggregation_type_from_metric(metric: Metric) -> MetricAggregationType:
    """
    Map the metric statistic onto a scaling aggregation type.

    Raises:
        UnsupportedStatisticError: For anything other than Average,
            Minimum or Maximum (percentiles, Sum, SampleCount, ...).
    """
    aggregation = _STATISTIC_ALIASES.get(metric.statistic.strip().lower())
    if aggregation is None:
        raise UnsupportedStatisticError(
            f"Can only scale on 'Minimum', 'Maximum', 'Average' metrics, got '{metric.statistic}'.",
            context={"statistic": metric.statistic},
        )
    return aggregation
