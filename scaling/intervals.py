"""
scaling/intervals.py

Normalization of user-authored scaling intervals into a gapless partition
of the real line.

Pure and deterministic: no I/O, no state, no side effects beyond debug
logging. Unbounded ends are represented by ``None`` rather than an
infinite float so comparisons and serialization stay unambiguous.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import Sequence

from scaling.errors import (
    AmbiguousIntervalError,
    NonFiniteValueError,
    NonMonotonicAdjustmentError,
    OverlappingIntervalsError,
    TooFewIntervalsError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScalingInterval:
    """
    A range of metric values in which to apply one capacity adjustment.

    ``lower`` and ``upper`` may be omitted; missing bounds are derived from
    neighbouring intervals. Only the lowest interval may stay open below and
    only the highest may stay open above.

    ``change`` is interpreted according to the policy's adjustment type:

    - ChangeInCapacity: added to the current capacity, positive or negative.
    - PercentChangeInCapacity: percentage of the current capacity to add or
      remove, in the range [-100..100].
    - ExactCapacity: the capacity to set.
    """

    change: float
    lower: float | None = None
    upper: float | None = None


@dataclass(frozen=True)
class NormalizedInterval:
    """
    A scaling interval with every interior bound resolved.

    ``lower is None`` only on the first interval of a normalized sequence
    (extends to -infinity) and ``upper is None`` only on the last (extends to
    +infinity). ``change is None`` marks a neutral gap in exact-capacity mode.
    """

    lower: float | None
    upper: float | None
    change: float | None


def is_neutral(interval: NormalizedInterval, absolute: bool) -> bool:
    """
    Return True when *interval* applies no adjustment.

    In exact-capacity mode a change of ``0`` is a real target (scale to
    zero), so only synthesized gaps count as neutral there.
    """

    if interval.change is None:
        return True
    return not absolute and interval.change == 0


def normalize_intervals(
    raw_intervals: Sequence[ScalingInterval | NormalizedInterval],
    absolute: bool,
) -> list[NormalizedInterval]:
    """
    Order, complete and validate *raw_intervals*.

    Parameters
    ----------
    raw_intervals:
        User-authored intervals in any order. Already-normalized intervals
        are accepted too and come back unchanged.
    absolute:
        True when changes are exact capacities. Exact capacities are not
        required to be monotonic, and gaps become ``change=None`` intervals
        instead of ``change=0``.

    Returns
    -------
    list[NormalizedInterval]
        Ascending, contiguous intervals covering the whole real line, with
        adjacent neutral intervals merged.

    Raises
    ------
    TooFewIntervalsError
        Fewer than two intervals were supplied.
    AmbiguousIntervalError
        An interval has no bounds at all, or an interior bound cannot be
        inferred from its neighbours.
    NonFiniteValueError
        A bound or change is NaN or infinite. Unbounded ends are written by
        omitting the bound.
    OverlappingIntervalsError
        Bounds are inverted, overlap, or an empty interval carries an
        adjustment.
    NonMonotonicAdjustmentError
        In delta mode, changes decrease somewhere when walking upwards.
    """

    if len(raw_intervals) < 2:
        raise TooFewIntervalsError(
            f"You must supply at least 2 intervals for autoscaling, got {len(raw_intervals)}.",
            context={"count": len(raw_intervals)},
        )

    intervals = _order(raw_intervals, absolute)
    _propagate_bounds(intervals)
    _require_complete(intervals)
    _require_non_overlapping(intervals, absolute)

    normalized = _merge_neutral(_fill_gaps(intervals, absolute), absolute)
    if not absolute:
        _require_monotonic(normalized)

    logger.debug(
        "Normalized %d scaling intervals into %d (absolute=%s)",
        len(raw_intervals),
        len(normalized),
        absolute,
    )
    return normalized


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _sort_key(interval: NormalizedInterval) -> tuple[float, int, float]:
    # Upper-only intervals sort before lower-bounded ones sharing the same value.
    if interval.lower is not None:
        upper = math.inf if interval.upper is None else interval.upper
        return (interval.lower, 1, upper)
    return (interval.upper, 0, interval.upper)


def _order(
    raw_intervals: Sequence[ScalingInterval | NormalizedInterval],
    absolute: bool,
) -> list[NormalizedInterval]:
    neutral_change = None if absolute else 0
    intervals: list[NormalizedInterval] = []
    for raw in raw_intervals:
        if raw.lower is None and raw.upper is None:
            raise AmbiguousIntervalError(
                "Every interval needs at least one of 'lower' or 'upper'.",
                context={"interval": _describe(raw)},
            )
        for name in ("lower", "upper", "change"):
            value = getattr(raw, name)
            if value is not None and not math.isfinite(value):
                raise NonFiniteValueError(
                    f"Interval {name} must be a finite number, got {value}; "
                    "omit a bound to leave it unbounded.",
                    context={"field": name, "interval": _describe(raw)},
                )
        change = neutral_change if raw.change is None else raw.change
        intervals.append(NormalizedInterval(lower=raw.lower, upper=raw.upper, change=change))
    return sorted(intervals, key=_sort_key)


def _propagate_bounds(intervals: list[NormalizedInterval]) -> None:
    """Fill missing bounds from neighbours until nothing changes."""

    changed = True
    while changed:
        changed = False
        for i in range(len(intervals) - 1):
            if intervals[i].upper is not None and intervals[i + 1].lower is None:
                intervals[i + 1] = replace(intervals[i + 1], lower=intervals[i].upper)
                changed = True
        for i in range(len(intervals) - 1, 0, -1):
            if intervals[i].lower is not None and intervals[i - 1].upper is None:
                intervals[i - 1] = replace(intervals[i - 1], upper=intervals[i].lower)
                changed = True


def _require_complete(intervals: list[NormalizedInterval]) -> None:
    last = len(intervals) - 1
    for index, interval in enumerate(intervals):
        if (interval.lower is None and index != 0) or (interval.upper is None and index != last):
            raise AmbiguousIntervalError(
                f"Could not determine the lower and upper bounds for {_describe(interval)}.",
                context={"index": index, "interval": _describe(interval)},
            )


def _require_non_overlapping(intervals: list[NormalizedInterval], absolute: bool) -> None:
    for index, interval in enumerate(intervals):
        if interval.lower is None or interval.upper is None:
            continue
        if not interval.lower <= interval.upper:
            raise OverlappingIntervalsError(
                f"Interval {_describe(interval)} has its lower bound above its upper bound.",
                context={"index": index, "interval": _describe(interval)},
            )
        if interval.lower == interval.upper and not is_neutral(interval, absolute):
            raise OverlappingIntervalsError(
                f"Empty interval {_describe(interval)} cannot carry an adjustment.",
                context={"index": index, "interval": _describe(interval)},
            )

    for below, above in zip(intervals, intervals[1:]):
        if not below.upper <= above.lower:
            raise OverlappingIntervalsError(
                f"Two intervals overlap: {_describe(below)} and {_describe(above)}.",
                context={"intervals": [_describe(below), _describe(above)]},
            )


def _fill_gaps(intervals: list[NormalizedInterval], absolute: bool) -> list[NormalizedInterval]:
    """
    Insert neutral intervals into gaps and close off both edges.

    In delta mode an edge interval that already decreases (bottom) or
    increases (top) is extended to infinity instead of getting a neutral
    neighbour. A neutral floor is only added below non-decreasing steps, so
    "increase from a floor" keeps a finite threshold.
    """

    neutral_change = None if absolute else 0
    intervals = list(intervals)
    first, last = intervals[0], intervals[-1]

    if not absolute and first.lower is not None and first.change < 0:
        intervals[0] = first = replace(first, lower=None)
    if not absolute and last.upper is not None and last.change > 0:
        intervals[-1] = last = replace(last, upper=None)

    filled: list[NormalizedInterval] = []
    if first.lower is not None:
        filled.append(NormalizedInterval(lower=None, upper=first.lower, change=neutral_change))
    for below, above in zip(intervals, intervals[1:]):
        filled.append(below)
        if below.upper < above.lower:
            filled.append(
                NormalizedInterval(lower=below.upper, upper=above.lower, change=neutral_change)
            )
    filled.append(last)
    if last.upper is not None:
        filled.append(NormalizedInterval(lower=last.upper, upper=None, change=neutral_change))
    return filled


def _merge_neutral(intervals: list[NormalizedInterval], absolute: bool) -> list[NormalizedInterval]:
    merged: list[NormalizedInterval] = []
    for interval in intervals:
        if merged and is_neutral(merged[-1], absolute) and is_neutral(interval, absolute):
            merged[-1] = replace(merged[-1], upper=interval.upper)
        else:
            merged.append(interval)
    return merged


def _require_monotonic(intervals: list[NormalizedInterval]) -> None:
    for below, above in zip(intervals, intervals[1:]):
        if below.change > above.change:
            raise NonMonotonicAdjustmentError(
                "Adjustments must be monotonic around zero: "
                f"{_describe(below)} lies below {_describe(above)}.",
                context={"intervals": [_describe(below), _describe(above)]},
            )


def _describe(interval: ScalingInterval | NormalizedInterval) -> dict:
    return {"lower": interval.lower, "upper": interval.upper, "change": interval.change}
