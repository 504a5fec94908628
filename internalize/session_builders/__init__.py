"""Review queue ordering and session composition."""

from internalize.session_builders.pool_types import SessionPools
from internalize.session_builders.priority import (
    current_time_like,
    is_due,
    priority_key,
    sort_by_priority,
)
from internalize.session_builders.review_builder import (
    build_review_session,
    combine_pools,
    dedupe_in_order,
    gather_session_pools,
    new_cards_to_fetch,
)

__all__ = [
    "SessionPools",
    "current_time_like",
    "is_due",
    "priority_key",
    "sort_by_priority",
    "build_review_session",
    "combine_pools",
    "dedupe_in_order",
    "gather_session_pools",
    "new_cards_to_fetch",
]
