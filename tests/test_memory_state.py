"""Tests for internalize/fsrs/memory_state.py -- retrievability and elapsed time."""

from dataclasses import replace
from datetime import datetime, timedelta

import pytest

from conftest import T0, days, make_state
from internalize.fsrs import (
    InvalidArgumentError,
    State,
    calculate_retrievability,
    create_new_card,
    get_elapsed_days,
)
from internalize.fsrs.memory_state import validate_scheduling_state


@pytest.mark.parametrize("stability", [0.1, 1.0, 3.1262, 100.0, 1e9])
def test_retrievability_is_one_at_zero_elapsed(stability):
    assert calculate_retrievability(stability, 0) == 1.0


def test_retrievability_half_life_point():
    # (1 + 9 / (9 * 1))^-1 = 0.5
    assert calculate_retrievability(1.0, 9) == pytest.approx(0.5)
    assert calculate_retrievability(10.0, 10) == pytest.approx(0.9)


@pytest.mark.parametrize("stability", [0.1, 2.5, 40.0])
def test_retrievability_non_increasing(stability):
    values = [calculate_retrievability(stability, t) for t in range(0, 400, 7)]
    assert all(later <= earlier for earlier, later in zip(values, values[1:]))
    assert all(0 < v <= 1 for v in values)


@pytest.mark.parametrize("stability", [0.0, -1.0])
def test_retrievability_without_stability_is_zero(stability):
    assert calculate_retrievability(stability, 5) == 0.0


def test_elapsed_days_none_is_zero():
    assert get_elapsed_days(None, T0) == 0


def test_elapsed_days_floors_partial_days():
    assert get_elapsed_days(T0, T0 + timedelta(hours=23, minutes=59)) == 0
    assert get_elapsed_days(T0, T0 + timedelta(days=1)) == 1
    assert get_elapsed_days(T0, T0 + timedelta(days=2, hours=20)) == 2


def test_elapsed_days_never_negative():
    assert get_elapsed_days(T0, T0 - days(3)) == 0


def test_elapsed_days_rejects_naive_aware_mix():
    naive = datetime(2024, 1, 1, 9, 0)
    with pytest.raises(InvalidArgumentError):
        get_elapsed_days(naive, T0)


def test_create_new_card():
    card = create_new_card(T0)
    assert card.state == State.NEW
    assert card.stability == 0
    assert card.difficulty == 0
    assert card.reps == 0
    assert card.lapses == 0
    assert card.last_review is None
    assert card.due == T0


def test_create_new_card_defaults_to_aware_now():
    card = create_new_card()
    assert card.due.tzinfo is not None


@pytest.mark.parametrize("field,value", [
    ("stability", -0.5),
    ("difficulty", -1.0),
    ("stability", float("nan")),
    ("difficulty", float("inf")),
    ("elapsed_days", -1),
    ("reps", -1),
    ("lapses", 1.5),
    ("state", "review"),
    ("due", "2024-01-01"),
])
def test_validate_rejects_malformed_snapshot(field, value):
    card = replace(make_state(), **{field: value})
    with pytest.raises(InvalidArgumentError):
        validate_scheduling_state(card)


def test_validate_accepts_new_card():
    validate_scheduling_state(create_new_card(T0))
