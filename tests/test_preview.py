"""Tests for previews and interval labels."""

import random

import pytest

from conftest import T0, days, make_state
from internalize.fsrs import (
    Rating,
    State,
    format_interval,
    get_rating_label,
    get_state_label,
)


def test_preview_runs_every_rating(scheduler, new_card):
    preview = scheduler.preview(new_card, T0)
    for rating in Rating:
        result = preview.for_rating(rating)
        assert result.review_log.rating == rating
        assert result.card.reps == 1


@pytest.mark.parametrize("state", list(State))
def test_preview_results_share_state_before(scheduler, state):
    card = make_state(state=state, stability=4.0, difficulty=5.0)
    preview = scheduler.preview(card, T0)
    states = {preview.for_rating(r).review_log.state for r in Rating}
    assert states == {state}


def test_preview_is_idempotent(scheduler):
    card = make_state(state=State.REVIEW, stability=30.0, difficulty=6.0,
                      last_review=T0 - days(25))
    assert scheduler.preview(card, T0) == scheduler.preview(card, T0)


def test_preview_does_not_advance_card(scheduler, new_card):
    scheduler.preview(new_card, T0)
    assert new_card.reps == 0
    assert new_card.state == State.NEW


@pytest.mark.parametrize("seed", range(25))
def test_easy_interval_never_shorter_than_good_in_review(scheduler, seed):
    rng = random.Random(seed)
    card = make_state(
        state=State.REVIEW,
        stability=rng.uniform(0.1, 5000.0),
        difficulty=rng.uniform(1.0, 10.0),
        last_review=T0 - days(rng.randint(0, 2000)),
    )
    preview = scheduler.preview(card, T0)
    assert preview.easy.card.scheduled_days >= preview.good.card.scheduled_days
    assert preview.good.card.scheduled_days >= preview.hard.card.scheduled_days


def test_get_preview_for_new_card(scheduler, new_card):
    preview = scheduler.get_preview(new_card, T0).as_dict()
    assert preview == {
        "again": {"interval": 0, "label": "Now"},
        "hard": {"interval": 0, "label": "Now"},
        "good": {"interval": 1, "label": "1 day"},
        "easy": {"interval": 1, "label": "1 day"},
    }


@pytest.mark.parametrize("days_,label", [
    (0, "Now"),
    (1, "1 day"),
    (2, "2 days"),
    (6, "6 days"),
    (7, "1 week"),
    (10, "1 week"),
    (11, "2 weeks"),
    (29, "4 weeks"),
    (30, "1 month"),
    (45, "2 months"),
    (75, "3 months"),
    (364, "12 months"),
    (365, "1 year"),
    (548, "2 years"),
    (36500, "100 years"),
])
def test_format_interval(days_, label):
    assert format_interval(days_) == label


def test_rating_and_state_labels():
    assert [get_rating_label(r) for r in Rating] == ["Again", "Hard", "Good", "Easy"]
    assert get_rating_label(3) == "Good"
    assert get_state_label(State.RELEARNING) == "relearning"
