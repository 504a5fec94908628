"""
FSRS Constants and Parameters

Enums, default weights and bounds for the FSRS-4.5 scheduler in one place.
Default weights come from the published FSRS-4.5 optimization on large-scale
review data (https://github.com/open-spaced-repetition/fsrs4anki).
"""

from enum import Enum, IntEnum


# ---- Ratings ----

class Rating(IntEnum):
    """Learner's self-assessment of one review."""
    AGAIN = 1   # Forgot
    HARD = 2    # Recalled with serious effort
    GOOD = 3    # Recalled after hesitation
    EASY = 4    # Recalled effortlessly


# ---- Card States ----

class State(str, Enum):
    """Lifecycle state of a card. String values are the storage representation."""
    NEW = "new"                 # Never reviewed
    LEARNING = "learning"       # In initial learning phase
    REVIEW = "review"           # In regular review cycle
    RELEARNING = "relearning"   # Lapsed, relearning


# ---- Global Constants ----

DEFAULT_REQUEST_RETENTION = 0.9   # Target probability of recall
DEFAULT_MAXIMUM_INTERVAL = 36500  # 100 years
WEIGHT_COUNT = 19

S_MIN = 0.1    # Minimum stability (days)
S_MAX = 1e10   # Maximum stability (days); overflowing recurrences saturate here
D_MIN = 1.0    # Minimum difficulty
D_MAX = 10.0   # Maximum difficulty

# Forgetting curve constant: R = (1 + t / (DECAY_FACTOR * S))^-1
DECAY_FACTOR = 9.0


# ---- Default Weights (w0-w18) ----

DEFAULT_WEIGHTS = (
    0.4072,   # w0: Initial stability for Again
    1.1829,   # w1: Initial stability for Hard
    3.1262,   # w2: Initial stability for Good
    15.4722,  # w3: Initial stability for Easy
    7.2102,   # w4: Initial difficulty (mean reversion target)
    0.5316,   # w5: Initial difficulty slope per rating
    1.0651,   # w6: Difficulty step per rating
    0.0046,   # w7: Mean reversion strength
    1.5418,   # w8: Recall stability scale (exp)
    0.1618,   # w9: Recall stability saturation
    1.0,      # w10: Recall stability retrievability gain
    2.1232,   # w11: Forget stability scale
    0.0062,   # w12: Forget stability difficulty exponent
    0.3378,   # w13: Forget stability stability exponent
    0.4175,   # w14: Forget stability retrievability gain
    0.0,      # w15: Hard penalty (recall stability multiplier for Hard)
    2.0,      # w16: Easy bonus (recall stability multiplier for Easy)
    0.4,      # w17: Unused by FSRS-4.5
    0.9,      # w18: Unused by FSRS-4.5
)


# ---- Initial Stability Weight by Rating ----
# Index into w for the stability assigned when a card (re)enters learning

INITIAL_STABILITY_WEIGHT = {
    Rating.AGAIN: 0,
    Rating.HARD: 1,
    Rating.GOOD: 2,
    Rating.EASY: 3,
}


# ---- Review Queue Priority by State ----
# Lower value = reviewed earlier

STATE_PRIORITY = {
    State.RELEARNING: 0,
    State.LEARNING: 1,
    State.REVIEW: 2,
    State.NEW: 3,
}


# ---- Session Composition ----

DEFAULT_NEW_CARDS_LIMIT = 10
DEFAULT_REVIEW_LIMIT = 100
NEW_CARD_BACKLOG_DIVISOR = 10  # One fewer new card per this many queued reviews
