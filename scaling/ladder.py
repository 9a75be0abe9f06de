"""
scaling/ladder.py

Builds the decrease and increase adjustment ladders from normalized
intervals and wires a built ladder into its alarm and action sinks.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from scaling.base import ActionSink, AlarmSink
from scaling.errors import AmbiguousIntervalError
from scaling.intervals import NormalizedInterval


class Direction(str, Enum):
    DOWN = "down"
    UP = "up"


class Comparison(str, Enum):
    LESS_THAN_OR_EQUAL_TO_THRESHOLD = "<="
    GREATER_THAN_OR_EQUAL_TO_THRESHOLD = ">="


_COMPARISON_BY_DIRECTION = {
    Direction.DOWN: Comparison.LESS_THAN_OR_EQUAL_TO_THRESHOLD,
    Direction.UP: Comparison.GREATER_THAN_OR_EQUAL_TO_THRESHOLD,
}


@dataclass(frozen=True)
class AdjustmentRecord:
    """
    One step of a ladder.

    Bounds are relative to the ladder threshold. ``None`` means the step
    extends to infinity on that side.
    """

    adjustment: float
    lower_bound: float | None = None
    upper_bound: float | None = None


@dataclass(frozen=True)
class Ladder:
    """
    Adjustments triggered by crossing one threshold in one direction.

    ``adjustments`` is ordered from the step nearest the threshold outwards
    and is never empty.
    """

    direction: Direction
    threshold: float
    comparison: Comparison
    adjustments: tuple[AdjustmentRecord, ...]


def build_ladder(
    intervals: Sequence[NormalizedInterval],
    anchor_index: int,
    direction: Direction,
) -> Ladder:
    """
    Walk outward from *anchor_index* and express every step relative to
    the threshold.

    The down ladder walks to index 0 and its threshold is the anchor's
    ``upper`` bound; the up ladder walks to the last index and its threshold
    is the anchor's ``lower`` bound. The terminating step is left open
    towards infinity.

    Raises:
        IndexError: If *anchor_index* is outside *intervals*.
        AmbiguousIntervalError: If the threshold is unbounded or the walk
            crosses an interval without an adjustment.
    """
    if not 0 <= anchor_index < len(intervals):
        raise IndexError(f"anchor_index {anchor_index} out of range for {len(intervals)} intervals")

    last = len(intervals) - 1
    anchor = intervals[anchor_index]
    if direction is Direction.DOWN:
        threshold = anchor.upper
        indices = range(anchor_index, -1, -1)
    else:
        threshold = anchor.lower
        indices = range(anchor_index, last + 1)

    if threshold is None:
        raise AmbiguousIntervalError(
            f"The {direction.value} ladder threshold is unbounded.",
            context={"anchor_index": anchor_index},
        )

    records = []
    for index in indices:
        interval = intervals[index]
        if interval.change is None:
            raise AmbiguousIntervalError(
                f"The {direction.value} ladder crosses an interval without adjustment.",
                context={"index": index},
            )
        open_lower = direction is Direction.DOWN and index == 0
        open_upper = direction is Direction.UP and index == last
        records.append(
            AdjustmentRecord(
                adjustment=interval.change,
                lower_bound=None if open_lower else _relative(interval.lower, threshold),
                upper_bound=None if open_upper else _relative(interval.upper, threshold),
            )
        )

    return Ladder(
        direction=direction,
        threshold=threshold,
        comparison=_COMPARISON_BY_DIRECTION[direction],
        adjustments=tuple(records),
    )


def attach_ladder(ladder: Ladder, alarm: AlarmSink, action: ActionSink) -> None:
    """Configure *alarm* for *ladder* and have it trigger *action*."""
    alarm.set_threshold(ladder.threshold)
    alarm.set_comparison(ladder.comparison)
    for record in ladder.adjustments:
        action.add_adjustment(record)
    alarm.on_trigger(action)


def _relative(bound: float | None, threshold: float) -> float | None:
    return None if bound is None else bound - threshold
