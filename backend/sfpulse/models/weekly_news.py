from sqlalchemy import Column, Integer, DateTime, Text, JSON
from sqlalchemy.sql import func
from sfpulse.database import Base


class WeeklyNews(Base):
    """One digest per week; the four categories are stored as parallel columns."""
    __tablename__ = "weekly_news"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    week_of = Column(DateTime, nullable=False, unique=True, index=True)

    tech_summary = Column(Text, nullable=False)
    tech_detailed = Column(Text, nullable=False)
    tech_bullets = Column(JSON, nullable=False, default=list)
    tech_sources = Column(JSON, nullable=False, default=list)
    tech_keywords = Column(JSON, nullable=False, default=list)

    politics_summary = Column(Text, nullable=False)
    politics_detailed = Column(Text, nullable=False)
    politics_bullets = Column(JSON, nullable=False, default=list)
    politics_sources = Column(JSON, nullable=False, default=list)
    politics_keywords = Column(JSON, nullable=False, default=list)

    economy_summary = Column(Text, nullable=False)
    economy_detailed = Column(Text, nullable=False)
    economy_bullets = Column(JSON, nullable=False, default=list)
    economy_sources = Column(JSON, nullable=False, default=list)
    economy_keywords = Column(JSON, nullable=False, default=list)

    sf_local_summary = Column(Text, nullable=False)
    sf_local_detailed = Column(Text, nullable=False)
    sf_local_bullets = Column(JSON, nullable=False, default=list)
    sf_local_sources = Column(JSON, nullable=False, default=list)
    sf_local_keywords = Column(JSON, nullable=False, default=list)

    weekly_keywords = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, server_default=func.now(), index=True)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
