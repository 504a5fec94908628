"""Display helpers for rating previews."""

from __future__ import annotations
from dataclasses import dataclass

from internalize.fsrs.constants import Rating, State
from internalize.fsrs.memory_updates import round_half_up


@dataclass(frozen=True)
class IntervalPreview:
    interval: int
    label: str


@dataclass(frozen=True)
class ReviewPreview:
    """Interval shown on each rating button."""
    again: IntervalPreview
    hard: IntervalPreview
    good: IntervalPreview
    easy: IntervalPreview

    def as_dict(self) -> dict[str, dict]:
        return {
            name: {"interval": item.interval, "label": item.label}
            for name, item in (
                ("again", self.again),
                ("hard", self.hard),
                ("good", self.good),
                ("easy", self.easy),
            )
        }


def _plural(count: int, unit: str) -> str:
    return f"1 {unit}" if count == 1 else f"{count} {unit}s"


def format_interval(days: int) -> str:
    """
    Human-readable interval.

    0 -> "Now", 1 -> "1 day", under a week in days, under a month in weeks,
    under a year in months (30 days), otherwise in years (365 days).
    """
    if days == 0:
        return "Now"
    if days < 7:
        return _plural(days, "day")
    if days < 30:
        return _plural(round_half_up(days / 7), "week")
    if days < 365:
        return _plural(round_half_up(days / 30), "month")
    return _plural(round_half_up(days / 365), "year")


def get_rating_label(rating: Rating) -> str:
    return Rating(rating).name.capitalize()


def get_state_label(state: State) -> str:
    return State(state).value
