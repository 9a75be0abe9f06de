"""
scaling/pivot.py

Locates the intervals that anchor the decrease and increase ladders.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from scaling.errors import AmbiguousIntervalError
from scaling.intervals import NormalizedInterval, is_neutral

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnchorResult:
    """
    Indices of the ladder anchors within a normalized interval sequence.

    ``lower_anchor_index`` points at the interval whose ``upper`` bound is the
    decrease-ladder threshold; ``upper_anchor_index`` at the interval whose
    ``lower`` bound is the increase-ladder threshold. Either may be absent.
    """

    lower_anchor_index: int | None = None
    upper_anchor_index: int | None = None

    @property
    def has_alarms(self) -> bool:
        return self.lower_anchor_index is not None or self.upper_anchor_index is not None


def locate_anchors(
    intervals: Sequence[NormalizedInterval],
    absolute: bool = False,
) -> AnchorResult:
    """
    Find the anchor interval on each side of the neutral interval.

    The decrease anchor is the interval directly below the neutral run and
    the increase anchor the one directly above it. Without any neutral
    interval, delta-mode ladders split where the sign of the change flips.
    A sequence that is neutral everywhere yields no anchors.

    Raises:
        AmbiguousIntervalError: If the split point cannot be determined
            (separated neutral runs, or exact-capacity intervals without a
            gap), or a threshold would sit at an unbounded end.
    """
    neutral = [index for index, interval in enumerate(intervals) if is_neutral(interval, absolute)]
    last = len(intervals) - 1

    if len(neutral) == len(intervals):
        return AnchorResult()

    if neutral:
        first_neutral, last_neutral = neutral[0], neutral[-1]
        if last_neutral - first_neutral + 1 != len(neutral):
            raise AmbiguousIntervalError(
                "Scaling intervals contain more than one neutral range; "
                "cannot tell which side triggers the lower or upper alarm.",
                context={"neutral_indices": neutral},
            )
        lower = first_neutral - 1 if first_neutral > 0 else None
        upper = last_neutral + 1 if last_neutral < last else None
    elif absolute:
        raise AmbiguousIntervalError(
            "Exact-capacity intervals need a range without adjustment "
            "separating the lower and upper alarms.",
        )
    else:
        negatives = [index for index, interval in enumerate(intervals) if interval.change < 0]
        lower = negatives[-1] if negatives else None
        first_positive = 0 if lower is None else lower + 1
        upper = first_positive if first_positive <= last else None

    if lower is not None and intervals[lower].upper is None:
        raise AmbiguousIntervalError(
            "The lower alarm threshold would be +infinity; add an upper bound "
            "or a range without adjustment above the decreasing steps.",
            context={"index": lower},
        )
    if upper is not None and intervals[upper].lower is None:
        raise AmbiguousIntervalError(
            "The upper alarm threshold would be -infinity; add a lower bound "
            "or a range without adjustment below the increasing steps.",
            context={"index": upper},
        )

    result = AnchorResult(lower_anchor_index=lower, upper_anchor_index=upper)
    logger.debug("Located ladder anchors lower=%s upper=%s", lower, upper)
    return result
