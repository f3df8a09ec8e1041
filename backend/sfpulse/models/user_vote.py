from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index, CheckConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from sfpulse.database import Base


class UserVote(Base):
    __tablename__ = "user_votes"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    event_id = Column(Integer, ForeignKey('timeline_events.id', ondelete='CASCADE'), nullable=False, index=True)
    hype_percentage = Column(Integer, nullable=False)
    backlash_percentage = Column(Integer, nullable=False)
    ip_address = Column(String(50), nullable=True)
    user_agent = Column(String(500), nullable=True)
    created_at = Column(DateTime, server_default=func.now(), index=True)

    # Relationships
    event = relationship("TimelineEvent", back_populates="votes")

    __table_args__ = (
        Index('ix_user_votes_event_created', 'event_id', 'created_at'),
        CheckConstraint("hype_percentage BETWEEN 0 AND 100", name='check_hype_range'),
        CheckConstraint("backlash_percentage BETWEEN 0 AND 100", name='check_backlash_range'),
    )
