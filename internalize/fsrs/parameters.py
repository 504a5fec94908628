"""
FSRS Parameters

Immutable parameter set for one scheduler: target retention, maximum
interval and the 19 model weights.

Parameters can be loaded from the environment (.env supported):
    FSRS_REQUEST_RETENTION=0.9
    FSRS_MAXIMUM_INTERVAL=36500
    FSRS_WEIGHTS=0.4072,1.1829,...   (19 comma-separated floats)
"""

from __future__ import annotations
import math
import os
from dataclasses import dataclass, field, replace
from typing import Iterable, Optional

from dotenv import load_dotenv

from internalize.fsrs.constants import (
    DEFAULT_MAXIMUM_INTERVAL,
    DEFAULT_REQUEST_RETENTION,
    DEFAULT_WEIGHTS,
    WEIGHT_COUNT,
)
from internalize.fsrs.exceptions import InvalidArgumentError


@dataclass(frozen=True)
class FSRSParameters:
    """
    Scheduler configuration.

    Validated on construction; an invalid set can never reach the engine.
    Use with_overrides() to derive a personalized copy.
    """
    request_retention: float = DEFAULT_REQUEST_RETENTION
    maximum_interval: int = DEFAULT_MAXIMUM_INTERVAL
    w: tuple[float, ...] = field(default=DEFAULT_WEIGHTS)

    def __post_init__(self):
        retention = self.request_retention
        if isinstance(retention, bool) or not isinstance(retention, (int, float)):
            raise InvalidArgumentError(f"request_retention must be a number, got {retention!r}")
        if not math.isfinite(retention) or not 0 < retention <= 1:
            raise InvalidArgumentError(f"request_retention must be in (0, 1], got {retention}")

        max_ivl = self.maximum_interval
        if isinstance(max_ivl, bool) or not isinstance(max_ivl, int) or max_ivl < 1:
            raise InvalidArgumentError(
                f"maximum_interval must be a positive integer, got {max_ivl!r}"
            )

        weights = _coerce_weights(self.w)
        # Frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "request_retention", float(retention))
        object.__setattr__(self, "w", weights)

    def with_overrides(self, **overrides) -> FSRSParameters:
        """Return a new parameter set with the given fields replaced."""
        return replace(self, **overrides)

    @classmethod
    def from_env(cls) -> FSRSParameters:
        """
        Build parameters from environment variables.

        Unset variables fall back to defaults. Malformed values raise
        InvalidArgumentError instead of being ignored.

        Returns:
            FSRSParameters
        """
        load_dotenv()

        overrides = {}
        retention = os.getenv("FSRS_REQUEST_RETENTION")
        if retention:
            overrides["request_retention"] = _parse_float("FSRS_REQUEST_RETENTION", retention)

        max_ivl = os.getenv("FSRS_MAXIMUM_INTERVAL")
        if max_ivl:
            try:
                overrides["maximum_interval"] = int(max_ivl)
            except ValueError:
                raise InvalidArgumentError(
                    f"FSRS_MAXIMUM_INTERVAL must be an integer, got {max_ivl!r}"
                ) from None

        weights = os.getenv("FSRS_WEIGHTS")
        if weights:
            overrides["w"] = tuple(
                _parse_float("FSRS_WEIGHTS", part) for part in weights.split(",")
            )

        return cls(**overrides)


def _coerce_weights(weights: Optional[Iterable[float]]) -> tuple[float, ...]:
    """Validate the weight vector: exactly 19 finite numbers."""
    if weights is None:
        raise InvalidArgumentError("w must be a sequence of 19 floats, got None")
    try:
        values = tuple(weights)
    except TypeError:
        raise InvalidArgumentError(f"w must be a sequence of floats, got {weights!r}") from None

    if len(values) != WEIGHT_COUNT:
        raise InvalidArgumentError(f"w must have {WEIGHT_COUNT} weights, got {len(values)}")

    for index, value in enumerate(values):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidArgumentError(f"w{index} must be a number, got {value!r}")
        if not math.isfinite(value):
            raise InvalidArgumentError(f"w{index} must be finite, got {value}")

    return tuple(float(v) for v in values)


def _parse_float(name: str, raw: str) -> float:
    try:
        return float(raw.strip())
    except ValueError:
        raise InvalidArgumentError(f"{name} must contain numbers, got {raw!r}") from None


DEFAULT_PARAMETERS = FSRSParameters()
