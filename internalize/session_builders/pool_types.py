"""
Typed pool models shared across session builders.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from internalize.fsrs.memory_state import Card


@dataclass
class SessionPools:
    """
    Candidate pools for one review session, each already ordered.

    learning: Learning/Relearning cards (uncapped)
    due: Review cards that are due (capped at the review limit)
    new: New cards (capped at the computed new-card allowance)
    """
    learning: list[Card] = field(default_factory=list)
    due: list[Card] = field(default_factory=list)
    new: list[Card] = field(default_factory=list)

    @property
    def backlog(self) -> int:
        """Cards already queued ahead of new cards."""
        return len(self.learning) + len(self.due)
