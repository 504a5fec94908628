"""
Memory Updates

Implements the FSRS-4.5 difficulty and stability recurrences and the
interval formula. Every function is pure and takes the weight vector `w`
explicitly, so one scheduler call always sees a single parameter set.

Key principles:
- Difficulty drifts with each rating and reverts toward the initial mean (w4)
- Successful recall grows stability more when recall was unlikely (low R)
- Forgetting resets stability to a fraction that depends on prior stability
"""

from __future__ import annotations
import math
from typing import Sequence

from internalize.fsrs.constants import (
    D_MAX,
    D_MIN,
    DECAY_FACTOR,
    INITIAL_STABILITY_WEIGHT,
    S_MAX,
    S_MIN,
    Rating,
)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward +inf (JavaScript Math.round)."""
    whole = math.floor(value)
    return whole + (1 if value - whole >= 0.5 else 0)


def _exp(x: float) -> float:
    try:
        return math.exp(x)
    except OverflowError:
        return math.inf


def _pow(base: float, exponent: float) -> float:
    try:
        return math.pow(base, exponent)
    except OverflowError:
        return math.inf


def _product(*factors: float) -> float:
    # A zero factor wins over an overflowed one (avoids inf * 0 = nan)
    if any(f == 0 for f in factors):
        return 0.0
    result = 1.0
    for f in factors:
        result *= f
    return result


def clamp_stability(stability: float) -> float:
    if math.isnan(stability):
        return S_MAX
    return max(S_MIN, min(S_MAX, stability))


def clamp_difficulty(difficulty: float) -> float:
    return max(D_MIN, min(D_MAX, difficulty))


def init_difficulty(w: Sequence[float], rating: Rating) -> float:
    """
    Difficulty assigned on the first review.

    Formula:
        D0 = clip(w4 - exp(w5 * (rating - 1)) + 1, 1, 10)
    """
    return clamp_difficulty(w[4] - _exp(w[5] * (rating - 1)) + 1)


def init_stability(w: Sequence[float], rating: Rating) -> float:
    """
    Stability assigned when a card enters (or re-enters) learning.

    Formula:
        S0 = clip(w[i(rating)], 0.1, S_MAX)   with i: AGAIN->0, HARD->1, GOOD->2, EASY->3
    """
    return clamp_stability(w[INITIAL_STABILITY_WEIGHT[rating]])


def mean_reversion(w: Sequence[float], difficulty: float) -> float:
    """
    Pull difficulty toward the initial mean.

    Formula:
        D' = w7 * w4 + (1 - w7) * D
    """
    return w[7] * w[4] + (1 - w[7]) * difficulty


def next_difficulty(w: Sequence[float], difficulty: float, rating: Rating) -> float:
    """
    Update difficulty based on the rating.

    Formula:
        D_new = clip(mean_reversion(D - w6 * (rating - 3)), 1, 10)

    Again and Hard raise difficulty, Easy lowers it, Good leaves only the
    mean reversion pull.
    """
    return clamp_difficulty(mean_reversion(w, difficulty - w[6] * (rating - 3)))


def next_recall_stability(
    w: Sequence[float],
    difficulty: float,
    stability: float,
    retrievability: float,
    rating: Rating
) -> float:
    """
    Update stability after successful recall (Hard/Good/Easy) in review.

    Formula:
        S_new = S * (1 + exp(w8) * (11 - D) * S^-w9
                       * (exp((1 - R) * w10) - 1) * hard_penalty * easy_bonus)

    Where hard_penalty = w15 for Hard (else 1) and easy_bonus = w16 for Easy
    (else 1). The result is clamped to [S_MIN, S_MAX]; exponentials that
    overflow saturate at S_MAX instead of raising.

    Args:
        w: Weight vector
        difficulty: Difficulty before this review
        stability: Stability before this review
        retrievability: R at review time
        rating: HARD, GOOD or EASY

    Returns:
        New stability value
    """
    stability = max(stability, S_MIN)
    difficulty = max(difficulty, D_MIN)

    hard_penalty = w[15] if rating == Rating.HARD else 1.0
    easy_bonus = w[16] if rating == Rating.EASY else 1.0

    growth = _product(
        _exp(w[8]),
        11 - difficulty,
        _pow(stability, -w[9]),
        _exp((1 - retrievability) * w[10]) - 1,
        hard_penalty,
        easy_bonus
    )
    return clamp_stability(stability * (1 + growth))


def next_forget_stability(
    w: Sequence[float],
    difficulty: float,
    stability: float,
    retrievability: float
) -> float:
    """
    Update stability after a lapse (Again in review).

    Formula:
        S_new = w11 * D^-w12 * ((S + 1)^w13 - 1) * exp((1 - R) * w14)

    The result is clamped to [S_MIN, S_MAX].
    """
    difficulty = max(difficulty, D_MIN)
    stability = max(stability, 0.0)

    new_stability = _product(
        w[11],
        _pow(difficulty, -w[12]),
        _pow(stability + 1, w[13]) - 1,
        _exp((1 - retrievability) * w[14])
    )
    return clamp_stability(new_stability)


def next_interval(stability: float, request_retention: float, maximum_interval: int) -> int:
    """
    Interval in days for a card in review.

    Formula:
        I = clip(round(S / 9 * (1 / retention - 1)), 1, maximum_interval)
    """
    interval = round_half_up(stability / DECAY_FACTOR * (1 / request_retention - 1))
    return min(max(interval, 1), maximum_interval)


def learning_interval(stability: float, rating: Rating) -> int:
    """
    Interval in days for a card in learning or relearning.

    Again and Hard repeat the same day, Good waits one day, Easy waits
    round(S) days (at least one).
    """
    if rating in (Rating.AGAIN, Rating.HARD):
        return 0
    if rating == Rating.GOOD:
        return 1
    return max(1, round_half_up(stability))
