"""
Pydantic records for the storage boundary.

The engine works on frozen dataclasses; collaborators (database rows, API
payloads) exchange these validated records instead. States travel as their
lowercase strings and timestamps as datetimes (ISO strings are accepted).
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from internalize.fsrs.constants import Rating, State
from internalize.fsrs.memory_state import CardSchedulingState


def _assume_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Stored timestamps without an offset are UTC (SQLite drops the offset)."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class FSRSStateRecord(BaseModel):
    """FSRS columns of a stored card."""
    stability: float = Field(0.0, ge=0)
    difficulty: float = Field(0.0, ge=0, le=10)
    elapsed_days: int = Field(0, ge=0)
    scheduled_days: int = Field(0, ge=0)
    reps: int = Field(0, ge=0)
    lapses: int = Field(0, ge=0)
    state: State = State.NEW
    last_review: Optional[datetime] = None
    due: datetime

    @field_validator("last_review", "due")
    @classmethod
    def timestamps_utc(cls, value):
        return _assume_utc(value)


class CardRecord(FSRSStateRecord):
    """A stored card with its FSRS state."""
    id: str
    deck_id: Optional[str] = None
    is_suspended: bool = False
    created_at: Optional[datetime] = None

    @field_validator("created_at")
    @classmethod
    def created_utc(cls, value):
        return _assume_utc(value)


class ReviewLogRecord(BaseModel):
    """A stored review log row."""
    card_id: str
    user_id: Optional[str] = None
    rating: Rating
    confidence: Optional[int] = Field(None, ge=1, le=5)
    response_time_ms: Optional[int] = Field(None, ge=0)

    # FSRS state before this review
    stability_before: Optional[float] = None
    difficulty_before: Optional[float] = None
    state_before: Optional[State] = None

    # Scheduling result
    scheduled_days: int = Field(..., ge=0)
    elapsed_days: int = Field(..., ge=0)

    reviewed_at: datetime

    @field_validator("reviewed_at")
    @classmethod
    def reviewed_utc(cls, value):
        return _assume_utc(value)


def card_to_scheduling_state(record: FSRSStateRecord) -> CardSchedulingState:
    """Convert a stored card (or its FSRS columns) to an engine snapshot."""
    return CardSchedulingState(
        stability=record.stability,
        difficulty=record.difficulty,
        elapsed_days=record.elapsed_days,
        scheduled_days=record.scheduled_days,
        reps=record.reps,
        lapses=record.lapses,
        state=record.state,
        last_review=record.last_review,
        due=record.due
    )


def scheduling_state_to_card_update(card: CardSchedulingState) -> dict:
    """Columns to write back after a review, keyed by record field name."""
    return FSRSStateRecord(
        stability=card.stability,
        difficulty=card.difficulty,
        elapsed_days=card.elapsed_days,
        scheduled_days=card.scheduled_days,
        reps=card.reps,
        lapses=card.lapses,
        state=card.state,
        last_review=card.last_review,
        due=card.due
    ).model_dump()
