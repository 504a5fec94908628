"""
Priority ordering for review queues.

Order: non-suspended before suspended, overdue before not overdue, then
Relearning < Learning < Review < New, then earliest due first. Python's sort
is stable, so cards that tie on every key keep their input order.
"""

from __future__ import annotations
from datetime import datetime, timezone
from typing import Iterable, Optional

from internalize.fsrs.constants import STATE_PRIORITY
from internalize.fsrs.exceptions import InvalidArgumentError
from internalize.fsrs.memory_state import Card


def priority_key(card: Card, now: datetime) -> tuple:
    """Sort key: smaller sorts first."""
    require_same_awareness(card.due, now)
    overdue = card.due < now
    return (
        card.is_suspended,
        not overdue,
        STATE_PRIORITY[card.state],
        card.due,
    )


def require_same_awareness(due: datetime, now: datetime) -> None:
    if (due.tzinfo is None) != (now.tzinfo is None):
        raise InvalidArgumentError(
            "Cannot compare naive and timezone-aware datetimes "
            f"(due={due.isoformat()}, now={now.isoformat()})"
        )


def current_time_like(reference: Optional[datetime]) -> datetime:
    """
    Current UTC time, naive when `reference` is naive.

    Naive timestamps are read as UTC throughout, so a default "now" must match
    the awareness of the cards it is compared with.
    """
    now = datetime.now(timezone.utc)
    if reference is not None and reference.tzinfo is None:
        return now.replace(tzinfo=None)
    return now


def sort_by_priority(cards: Iterable[Card], now: Optional[datetime] = None) -> list[Card]:
    """
    Return cards in review order. The input is not modified.

    Args:
        cards: Cards to order
        now: Reference time for "overdue" (defaults to now, UTC, naive if
            the cards' due dates are naive)

    Returns:
        New list, highest priority first
    """
    cards = list(cards)
    if now is None:
        now = current_time_like(cards[0].due if cards else None)
    return sorted(cards, key=lambda card: priority_key(card, now))


def is_due(card: Card, now: Optional[datetime] = None) -> bool:
    """A card is due once `due <= now`, unless it is suspended."""
    if card.is_suspended:
        return False
    if now is None:
        now = current_time_like(card.due)
    require_same_awareness(card.due, now)
    return card.due <= now
