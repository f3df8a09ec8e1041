from sqlalchemy import Column, Integer, String, DateTime, Text, JSON
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from sfpulse.database import Base


class TimelineEvent(Base):
    __tablename__ = "timeline_events"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    headline = Column(String, nullable=False)
    week_of = Column(DateTime, nullable=False, unique=True, index=True)
    hype_summary = Column(Text, nullable=False)
    backlash_summary = Column(Text, nullable=False)
    weekly_pulse = Column(Text, nullable=False)
    hype_tweets = Column(JSON, nullable=True)
    backlash_tweets = Column(JSON, nullable=True)
    # Running aggregate {hype, backlash, totalVotes}, rewritten on every vote
    community_sentiment = Column(JSON, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    # Relationships
    votes = relationship("UserVote", back_populates="event", cascade="all, delete-orphan", passive_deletes=True)
