"""
FSRS - Free Spaced Repetition Scheduler

Main API of the scheduling engine.

This package implements FSRS-4.5 with:
- Power forgetting curve: R = (1 + t / 9S)^-1
- Per-card state machine: New -> Learning -> Review <-> Relearning
- Stability/difficulty recurrences tuned by 19 weights
- Pure, reentrant scheduling (no I/O)

Quick start:
    from internalize import fsrs

    card = fsrs.create_new_card()
    result = fsrs.process_review(card, fsrs.Rating.GOOD)
    card, log = result.card, result.review_log

    # Labels for the rating buttons
    fsrs.get_scheduler().get_preview(card).as_dict()

Persistence lives in internalize.fsrs.database and is imported explicitly.
"""

# Core scheduler API (algorithm logic)
from internalize.fsrs.scheduler import (
    FSRS,
    SchedulingPreview,
    SchedulingResult,
    coerce_rating,
    get_scheduler,
    process_review,
)

# Constants and parameters
from internalize.fsrs.constants import (
    DEFAULT_WEIGHTS,
    D_MAX,
    D_MIN,
    S_MAX,
    S_MIN,
    STATE_PRIORITY,
    Rating,
    State,
)
from internalize.fsrs.parameters import DEFAULT_PARAMETERS, FSRSParameters

# Memory state
from internalize.fsrs.memory_state import (
    Card,
    CardSchedulingState,
    ReviewLog,
    calculate_retrievability,
    create_new_card,
    get_elapsed_days,
)

# Display helpers
from internalize.fsrs.preview import (
    IntervalPreview,
    ReviewPreview,
    format_interval,
    get_rating_label,
    get_state_label,
)

from internalize.fsrs.exceptions import (
    CardNotFoundError,
    FSRSError,
    InvalidArgumentError,
    InvalidRatingError,
    PersistenceError,
)


__all__ = [
    # Core algorithm
    "FSRS",
    "SchedulingPreview",
    "SchedulingResult",
    "coerce_rating",
    "get_scheduler",
    "process_review",

    # Enums
    "Rating",
    "State",

    # Parameters
    "DEFAULT_PARAMETERS",
    "DEFAULT_WEIGHTS",
    "FSRSParameters",
    "D_MAX",
    "D_MIN",
    "S_MAX",
    "S_MIN",
    "STATE_PRIORITY",

    # Memory state
    "Card",
    "CardSchedulingState",
    "ReviewLog",
    "calculate_retrievability",
    "create_new_card",
    "get_elapsed_days",

    # Display
    "IntervalPreview",
    "ReviewPreview",
    "format_interval",
    "get_rating_label",
    "get_state_label",

    # Errors
    "CardNotFoundError",
    "FSRSError",
    "InvalidArgumentError",
    "InvalidRatingError",
    "PersistenceError",
]
