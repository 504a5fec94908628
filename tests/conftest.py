"""Shared fixtures for the FSRS test suite."""

from datetime import datetime, timedelta, timezone

import pytest

from internalize.fsrs import FSRS, Card, CardSchedulingState, State, create_new_card


T0 = datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)


def days(n: float) -> timedelta:
    return timedelta(days=n)


def make_state(
    state: State = State.REVIEW,
    stability: float = 10.0,
    difficulty: float = 5.0,
    last_review=None,
    due=None,
    reps: int = 3,
    lapses: int = 0,
    scheduled_days: int = 0,
) -> CardSchedulingState:
    """Scheduling snapshot with sensible defaults for a reviewed card."""
    if last_review is None:
        last_review = T0 - days(10)
    if due is None:
        due = last_review + days(scheduled_days)
    return CardSchedulingState(
        stability=stability,
        difficulty=difficulty,
        elapsed_days=0,
        scheduled_days=scheduled_days,
        reps=reps,
        lapses=lapses,
        state=state,
        last_review=last_review,
        due=due,
    )


def make_card(
    card_id,
    state: State = State.REVIEW,
    due=None,
    is_suspended: bool = False,
    deck_id=None,
    created_at=None,
) -> Card:
    """Queue-level card; only state and due matter for ordering."""
    if due is None:
        due = T0
    if state == State.NEW:
        scheduling = create_new_card(due)
    else:
        scheduling = make_state(state=state, last_review=due - days(1), due=due)
    return Card(
        id=card_id,
        scheduling=scheduling,
        deck_id=deck_id,
        is_suspended=is_suspended,
        created_at=created_at,
    )


@pytest.fixture
def scheduler():
    return FSRS()


@pytest.fixture
def new_card():
    return create_new_card(T0)
