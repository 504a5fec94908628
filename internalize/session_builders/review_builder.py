"""
Review Session Composition

Builds a review queue from three pools:
1. Learning pool: Learning/Relearning cards, all of them, earliest due first
2. Due pool: Review cards with due <= now, earliest due first, capped
3. New pool: never-reviewed cards, oldest first

Session Logic:
- Take every learning card
- Add due reviews up to the review limit
- Add new cards up to new_cards_limit, minus one per 10 queued cards
- Drop repeated card ids, keeping the first occurrence

The gathering step works on an in-memory collection; the database module
feeds its query results straight into combine_pools().
"""

from __future__ import annotations
from datetime import datetime
from typing import Any, Iterable, Optional

from internalize.fsrs.constants import (
    DEFAULT_NEW_CARDS_LIMIT,
    DEFAULT_REVIEW_LIMIT,
    NEW_CARD_BACKLOG_DIVISOR,
    State,
)
from internalize.fsrs.exceptions import InvalidArgumentError
from internalize.fsrs.memory_state import Card
from internalize.session_builders.pool_types import SessionPools
from internalize.session_builders.priority import current_time_like, is_due


def new_cards_to_fetch(new_cards_limit: int, backlog: int) -> int:
    """
    New-card allowance shrinks by one per 10 cards already queued.

    Formula:
        max(0, new_cards_limit - floor(backlog / 10))
    """
    return max(0, new_cards_limit - backlog // NEW_CARD_BACKLOG_DIVISOR)


def dedupe_in_order(cards: Iterable[Card]) -> list[Card]:
    """Keep the first occurrence of each card id."""
    seen: set = set()
    unique: list[Card] = []
    for card in cards:
        if card.id in seen:
            continue
        seen.add(card.id)
        unique.append(card)
    return unique


def combine_pools(pools: SessionPools) -> list[Card]:
    """Concatenate learning, due and new pools, then dedupe."""
    return dedupe_in_order([*pools.learning, *pools.due, *pools.new])


def gather_session_pools(
    cards: Iterable[Card],
    now: Optional[datetime] = None,
    deck_id: Any = None,
    new_cards_limit: int = DEFAULT_NEW_CARDS_LIMIT,
    review_limit: int = DEFAULT_REVIEW_LIMIT
) -> SessionPools:
    """
    Split a card collection into ordered, capped session pools.

    Args:
        cards: Candidate cards (any order)
        now: Reference time (defaults to now, UTC, naive if the cards' due
            dates are naive)
        deck_id: Restrict to one deck (None = all decks)
        new_cards_limit: Maximum new cards before backlog reduction
        review_limit: Maximum due review cards

    Returns:
        SessionPools

    Raises:
        InvalidArgumentError: negative limits, or naive and aware timestamps mixed
    """
    _require_limit("new_cards_limit", new_cards_limit)
    _require_limit("review_limit", review_limit)

    scoped = [
        card for card in cards
        if not card.is_suspended and (deck_id is None or card.deck_id == deck_id)
    ]
    if now is None:
        now = current_time_like(scoped[0].due if scoped else None)

    learning = sorted(
        (c for c in scoped if c.state in (State.LEARNING, State.RELEARNING)),
        key=lambda c: c.due
    )
    due = sorted(
        (c for c in scoped if c.state == State.REVIEW and is_due(c, now)),
        key=lambda c: c.due
    )[:review_limit]

    pools = SessionPools(learning=learning, due=due)

    allowance = new_cards_to_fetch(new_cards_limit, pools.backlog)
    if allowance > 0:
        new_cards = [c for c in scoped if c.state == State.NEW]
        # Cards without a creation time keep their input order, after dated ones
        new_cards.sort(key=lambda c: (c.created_at is None, c.created_at or now))
        pools.new = new_cards[:allowance]

    return pools


def build_review_session(
    cards: Iterable[Card],
    now: Optional[datetime] = None,
    deck_id: Any = None,
    new_cards_limit: int = DEFAULT_NEW_CARDS_LIMIT,
    review_limit: int = DEFAULT_REVIEW_LIMIT
) -> list[Card]:
    """
    Create a review session: learning first, then due reviews, then new cards.

    Returns:
        Ordered list of unique cards
    """
    pools = gather_session_pools(
        cards,
        now=now,
        deck_id=deck_id,
        new_cards_limit=new_cards_limit,
        review_limit=review_limit
    )
    return combine_pools(pools)


def _require_limit(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidArgumentError(f"{name} must be a non-negative integer, got {value!r}")
