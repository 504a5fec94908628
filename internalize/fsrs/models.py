"""
SQLAlchemy ORM Models for FSRS Persistence

Defines the Card and ReviewLog tables written by the database module.
"""

from sqlalchemy import Boolean, Column, DateTime, Float, Index, Integer, String
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class CardModel(Base):
    """
    Persistent FSRS state for a single card.
    """
    __tablename__ = 'cards'

    id = Column(String(36), primary_key=True)
    deck_id = Column(String(36), nullable=True, index=True)
    user_id = Column(String(255), nullable=True)

    # FSRS state
    stability = Column(Float, nullable=False, default=0.0)
    difficulty = Column(Float, nullable=False, default=0.0)
    elapsed_days = Column(Integer, nullable=False, default=0)
    scheduled_days = Column(Integer, nullable=False, default=0)
    reps = Column(Integer, nullable=False, default=0)
    lapses = Column(Integer, nullable=False, default=0)
    state = Column(String(20), nullable=False, default='new')  # new, learning, review, relearning
    last_review = Column(DateTime(timezone=True), nullable=True)
    due = Column(DateTime(timezone=True), nullable=False)

    # Metadata
    is_suspended = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        Index('ix_cards_state_due', 'state', 'due'),
    )

    def __repr__(self):
        return f"<CardModel({self.id}, state={self.state}, due={self.due})>"


class ReviewLogModel(Base):
    """
    Log entry for a single review of a card.

    Captures the state before the review and the scheduling result.
    """
    __tablename__ = 'review_logs'

    id = Column(Integer, primary_key=True, autoincrement=True)
    card_id = Column(String(36), nullable=False, index=True)
    user_id = Column(String(255), nullable=True)

    # Review data
    rating = Column(Integer, nullable=False)  # 1=AGAIN, 2=HARD, 3=GOOD, 4=EASY
    confidence = Column(Integer, nullable=True)
    response_time_ms = Column(Integer, nullable=True)

    # FSRS state before this review
    stability_before = Column(Float, nullable=True)
    difficulty_before = Column(Float, nullable=True)
    state_before = Column(String(20), nullable=True)

    # Scheduling result
    scheduled_days = Column(Integer, nullable=False)
    elapsed_days = Column(Integer, nullable=False)

    reviewed_at = Column(DateTime(timezone=True), nullable=False)

    def __repr__(self):
        return f"<ReviewLogModel(id={self.id}, card={self.card_id}, rating={self.rating})>"
