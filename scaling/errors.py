"""
scaling/errors.py

Configuration errors raised while building a step scaling policy.

Every failure is a construction-time validation error. Nothing here is
transient, so callers should surface these immediately instead of retrying.
"""

from __future__ import annotations

from typing import Any


class ScalingConfigError(ValueError):
    """
    Base error for invalid step scaling configuration.

    Attributes:
        code: Stable machine-readable failure code.
        message: Human-readable description.
        context: Optional structured details (offending intervals, values).
    """

    code: str = "invalid_scaling_config"

    def __init__(self, message: str, *, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = dict(context or {})

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "context": self.context,
        }


class TooFewIntervalsError(ScalingConfigError):
    """Raised when fewer than two scaling steps are supplied."""

    code = "too_few_intervals"


class AmbiguousIntervalError(ScalingConfigError):
    """Raised when interval bounds or the ladder split point cannot be resolved."""

    code = "ambiguous_interval"


class OverlappingIntervalsError(ScalingConfigError):
    """Raised when resolved bounds do not form a clean partition."""

    code = "overlapping_intervals"


class NonMonotonicAdjustmentError(ScalingConfigError):
    """Raised when delta adjustments do not grow away from the neutral interval."""

    code = "non_monotonic_adjustment"


class UnsupportedStatisticError(ScalingConfigError):
    """Raised when the metric statistic cannot drive step scaling."""

    code = "unsupported_statistic"


class InvalidCooldownError(ScalingConfigError):
    """Raised when the cooldown period is negative."""

    code = "invalid_cooldown"


class NonFiniteValueError(ScalingConfigError):
    """Raised when an interval bound or change is NaN or infinite."""

    code = "non_finite_value"
