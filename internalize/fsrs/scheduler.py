"""
Scheduler - FSRS Algorithm Logic

Pure FSRS scheduling and state transitions (no database calls).

Main workflow:
1. Validate the snapshot, rating and timestamp
2. Compute whole elapsed days since the last review
3. Apply the update rules for the card's state (New, Learning/Relearning, Review)
4. Pick the interval and due date
5. Return the new snapshot + review log

This module handles ONLY the algorithm logic.
Persistence is handled by the database module.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from internalize.fsrs import memory_updates
from internalize.fsrs.constants import Rating, State
from internalize.fsrs.exceptions import InvalidArgumentError, InvalidRatingError
from internalize.fsrs.memory_state import (
    CardSchedulingState,
    ReviewLog,
    calculate_retrievability,
    get_elapsed_days,
    validate_scheduling_state,
)
from internalize.fsrs.parameters import DEFAULT_PARAMETERS, FSRSParameters
from internalize.fsrs.preview import IntervalPreview, ReviewPreview, format_interval

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SchedulingResult:
    """New snapshot and the log entry describing the review that produced it."""
    card: CardSchedulingState
    review_log: ReviewLog


@dataclass(frozen=True)
class SchedulingPreview:
    """Outcome of each possible rating for the same snapshot."""
    again: SchedulingResult
    hard: SchedulingResult
    good: SchedulingResult
    easy: SchedulingResult

    def for_rating(self, rating: Rating) -> SchedulingResult:
        return getattr(self, Rating(rating).name.lower())


class FSRS:
    """
    FSRS-4.5 scheduler bound to one immutable parameter set.

    Instances hold no mutable state, so one instance can serve any number of
    threads. Build independent instances to schedule with different
    parameters side by side.
    """

    def __init__(self, params: Optional[FSRSParameters] = None):
        if params is None:
            params = DEFAULT_PARAMETERS
        if not isinstance(params, FSRSParameters):
            raise InvalidArgumentError(f"params must be FSRSParameters, got {type(params).__name__}")
        self._params = params

    @property
    def params(self) -> FSRSParameters:
        return self._params

    def calculate_retrievability(self, stability: float, elapsed_days: float) -> float:
        return calculate_retrievability(stability, elapsed_days)

    def schedule(
        self,
        card: CardSchedulingState,
        rating: Rating,
        now: Optional[datetime] = None
    ) -> SchedulingResult:
        """
        Apply one rating to one card.

        The input snapshot is never modified.

        Args:
            card: Current scheduling snapshot
            rating: AGAIN, HARD, GOOD or EASY (or the ints 1-4)
            now: Review timestamp (defaults to now, UTC)

        Returns:
            SchedulingResult with the new snapshot and its review log

        Raises:
            InvalidRatingError: rating outside 1-4
            InvalidArgumentError: malformed snapshot or timestamp
        """
        rating = coerce_rating(rating)
        validate_scheduling_state(card)
        if now is None:
            now = datetime.now(timezone.utc)
        elif not isinstance(now, datetime):
            raise InvalidArgumentError(f"now must be a datetime, got {now!r}")

        w = self._params.w
        elapsed_days = get_elapsed_days(card.last_review, now)
        lapses = card.lapses

        if card.state == State.NEW:
            # First review
            difficulty = memory_updates.init_difficulty(w, rating)
            stability = memory_updates.init_stability(w, rating)

            if rating == Rating.AGAIN:
                state = State.LEARNING
                lapses = 1
            elif rating == Rating.HARD:
                state = State.LEARNING
            else:
                state = State.REVIEW

        elif card.state in (State.LEARNING, State.RELEARNING):
            # Short-term phase: stability restarts from the rating's initial value
            difficulty = memory_updates.next_difficulty(w, card.difficulty, rating)
            stability = memory_updates.init_stability(w, rating)

            if rating in (Rating.AGAIN, Rating.HARD):
                state = card.state
                if rating == Rating.AGAIN and card.state == State.RELEARNING:
                    lapses += 1
            else:
                state = State.REVIEW

        else:
            # Review: long-term update driven by retrievability at review time
            retrievability = calculate_retrievability(card.stability, elapsed_days)
            difficulty = memory_updates.next_difficulty(w, card.difficulty, rating)

            if rating == Rating.AGAIN:
                stability = memory_updates.next_forget_stability(
                    w, card.difficulty, card.stability, retrievability
                )
                state = State.RELEARNING
                lapses += 1
            else:
                stability = memory_updates.next_recall_stability(
                    w, card.difficulty, card.stability, retrievability, rating
                )
                state = State.REVIEW

        if state == State.REVIEW:
            scheduled_days = memory_updates.next_interval(
                stability,
                self._params.request_retention,
                self._params.maximum_interval
            )
        else:
            scheduled_days = memory_updates.learning_interval(stability, rating)

        try:
            due = now + timedelta(days=scheduled_days)
        except OverflowError:
            raise InvalidArgumentError(
                f"Interval of {scheduled_days} days from {now.isoformat()} is past the last representable date"
            ) from None

        new_card = CardSchedulingState(
            stability=stability,
            difficulty=difficulty,
            elapsed_days=elapsed_days,
            scheduled_days=scheduled_days,
            reps=card.reps + 1,
            lapses=lapses,
            state=state,
            last_review=now,
            due=due
        )

        review_log = ReviewLog(
            rating=rating,
            scheduled_days=scheduled_days,
            elapsed_days=elapsed_days,
            state=card.state,
            stability=stability,
            difficulty=difficulty,
            reviewed_at=now,
            stability_before=card.stability,
            difficulty_before=card.difficulty
        )

        logger.debug(
            "schedule %s -> %s rating=%s S=%.4f D=%.4f ivl=%d",
            card.state.value, state.value, rating.name, stability, difficulty, scheduled_days
        )

        return SchedulingResult(card=new_card, review_log=review_log)

    def preview(
        self,
        card: CardSchedulingState,
        now: Optional[datetime] = None
    ) -> SchedulingPreview:
        """
        Schedule the same snapshot under every rating.

        Nothing is mutated, so calling twice with the same `now` gives equal
        results.
        """
        if now is None:
            now = datetime.now(timezone.utc)

        return SchedulingPreview(
            again=self.schedule(card, Rating.AGAIN, now),
            hard=self.schedule(card, Rating.HARD, now),
            good=self.schedule(card, Rating.GOOD, now),
            easy=self.schedule(card, Rating.EASY, now)
        )

    def get_preview(
        self,
        card: CardSchedulingState,
        now: Optional[datetime] = None
    ) -> ReviewPreview:
        """Interval and display label per rating, for the rating buttons."""
        preview = self.preview(card, now)

        def _summary(result: SchedulingResult) -> IntervalPreview:
            days = result.review_log.scheduled_days
            return IntervalPreview(interval=days, label=format_interval(days))

        return ReviewPreview(
            again=_summary(preview.again),
            hard=_summary(preview.hard),
            good=_summary(preview.good),
            easy=_summary(preview.easy)
        )

    def get_retrievability(
        self,
        card: CardSchedulingState,
        now: Optional[datetime] = None
    ) -> float:
        """
        Current probability of recall.

        New cards and cards never reviewed report 1.0.
        """
        if card.state == State.NEW or card.last_review is None:
            return 1.0
        if now is None:
            now = datetime.now(timezone.utc)
        return calculate_retrievability(card.stability, get_elapsed_days(card.last_review, now))


def coerce_rating(rating) -> Rating:
    """
    Convert 1-4 (or a Rating) to Rating.

    Raises:
        InvalidRatingError: bools, floats and values outside 1-4
    """
    if isinstance(rating, Rating):
        return rating
    if isinstance(rating, bool) or not isinstance(rating, int):
        raise InvalidRatingError(f"Rating must be an integer 1-4, got {rating!r}")
    try:
        return Rating(rating)
    except ValueError:
        raise InvalidRatingError(f"Rating must be 1-4, got {rating}") from None


_default_scheduler: Optional[FSRS] = None


def get_scheduler() -> FSRS:
    """Shared scheduler with default parameters, created on first use."""
    global _default_scheduler
    if _default_scheduler is None:
        _default_scheduler = FSRS()
    return _default_scheduler


def process_review(
    card: CardSchedulingState,
    rating: Rating,
    now: Optional[datetime] = None,
    params: Optional[FSRSParameters] = None
) -> SchedulingResult:
    """
    Process a review and return the new snapshot + review log.

    Caller is responsible for:
    1. Loading the card
    2. Persisting the new snapshot and the log together

    Args:
        card: Current scheduling snapshot
        rating: User rating (AGAIN, HARD, GOOD, EASY)
        now: Review timestamp (defaults to now)
        params: Parameter set (defaults to the shared default scheduler)

    Returns:
        SchedulingResult
    """
    scheduler = get_scheduler() if params is None else FSRS(params)
    return scheduler.schedule(card, rating, now)
