"""
Memory State - FSRS Card State and Retrievability

Defines the scheduling snapshot of a card and the derived quantities.

Key concepts:
- Stability (S): Days until recall probability decays to the target retention
- Difficulty (D): How hard the card is to retain (1-10 scale)
- Retrievability (R): Probability of successful recall at time t
"""

from __future__ import annotations
import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

from internalize.fsrs.constants import DECAY_FACTOR, Rating, State
from internalize.fsrs.exceptions import InvalidArgumentError


SECONDS_PER_DAY = 86400.0


@dataclass(frozen=True)
class CardSchedulingState:
    """
    Scheduling snapshot of a single card.

    Snapshots are immutable: the scheduler returns a new one per review.
    """
    stability: float  # S, in days
    difficulty: float  # D, 0 before the first rating, else 1-10

    elapsed_days: int  # Days between the previous two reviews
    scheduled_days: int  # Interval assigned by the last review

    reps: int  # Number of reviews so far
    lapses: int  # Number of forgetting events

    state: State
    last_review: Optional[datetime]  # None until the first review
    due: datetime


@dataclass(frozen=True)
class ReviewLog:
    """
    Record of one review, produced alongside the new snapshot.

    `state` is the state BEFORE the review; stability/difficulty are AFTER.
    """
    rating: Rating
    scheduled_days: int
    elapsed_days: int
    state: State
    stability: float
    difficulty: float
    reviewed_at: datetime
    stability_before: float = 0.0
    difficulty_before: float = 0.0


@dataclass(frozen=True)
class Card:
    """A schedulable card: identity, queue metadata and its scheduling snapshot."""
    id: Any
    scheduling: CardSchedulingState
    deck_id: Any = None
    is_suspended: bool = False
    created_at: Optional[datetime] = field(default=None, compare=False)

    @property
    def state(self) -> State:
        return self.scheduling.state

    @property
    def due(self) -> datetime:
        return self.scheduling.due


def create_new_card(now: Optional[datetime] = None) -> CardSchedulingState:
    """
    Create the scheduling state of a card that has never been reviewed.

    Args:
        now: Creation time (defaults to now, UTC). The card is due immediately.

    Returns:
        CardSchedulingState in state NEW
    """
    if now is None:
        now = datetime.now(timezone.utc)

    return CardSchedulingState(
        stability=0.0,
        difficulty=0.0,
        elapsed_days=0,
        scheduled_days=0,
        reps=0,
        lapses=0,
        state=State.NEW,
        last_review=None,
        due=now
    )


def calculate_retrievability(stability: float, elapsed_days: float) -> float:
    """
    Calculate retrievability using the FSRS power forgetting curve.

    Formula: R = (1 + t / (9 * S))^-1

    Where:
    - t = days since last review
    - S = stability (in days)

    At t = 0, R = 1. R decays monotonically with t, and a card without
    stability (S <= 0) has nothing to recall: R = 0.

    Args:
        stability: Current stability in days
        elapsed_days: Time since last review in days

    Returns:
        Retrievability between 0 and 1
    """
    if stability <= 0:
        return 0.0
    return 1.0 / (1.0 + elapsed_days / (DECAY_FACTOR * stability))


def get_elapsed_days(last_review: Optional[datetime], now: datetime) -> int:
    """
    Whole days since the last review, never negative.

    Args:
        last_review: Timestamp of the previous review, or None for new cards
        now: Current timestamp

    Returns:
        floor((now - last_review) in days), clamped at 0; 0 if never reviewed
    """
    if last_review is None:
        return 0

    _require_comparable(last_review, now)
    delta = (now - last_review).total_seconds() / SECONDS_PER_DAY
    return max(0, math.floor(delta))


def validate_scheduling_state(card: CardSchedulingState) -> None:
    """
    Check a snapshot before it enters the state machine.

    Raises:
        InvalidArgumentError: on negative or non-finite numbers, an unknown
            state, or missing/ill-typed timestamps
    """
    if not isinstance(card, CardSchedulingState):
        raise InvalidArgumentError(f"Expected CardSchedulingState, got {type(card).__name__}")
    if not isinstance(card.state, State):
        raise InvalidArgumentError(f"state must be a State, got {card.state!r}")

    for name in ("stability", "difficulty"):
        value = getattr(card, name)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidArgumentError(f"{name} must be a number, got {value!r}")
        if not math.isfinite(value) or value < 0:
            raise InvalidArgumentError(f"{name} must be finite and >= 0, got {value}")

    for name in ("elapsed_days", "scheduled_days", "reps", "lapses"):
        value = getattr(card, name)
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise InvalidArgumentError(f"{name} must be a non-negative integer, got {value!r}")

    if not isinstance(card.due, datetime):
        raise InvalidArgumentError(f"due must be a datetime, got {card.due!r}")
    if card.last_review is not None and not isinstance(card.last_review, datetime):
        raise InvalidArgumentError(f"last_review must be a datetime or None, got {card.last_review!r}")


def _require_comparable(a: datetime, b: datetime) -> None:
    """Naive and aware datetimes cannot be subtracted; treat the mix as a caller bug."""
    if (a.tzinfo is None) != (b.tzinfo is None):
        raise InvalidArgumentError(
            "Cannot mix naive and timezone-aware datetimes "
            f"(last_review={a.isoformat()}, now={b.isoformat()})"
        )
