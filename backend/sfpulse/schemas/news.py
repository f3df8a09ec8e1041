from pydantic import BaseModel, Field
from typing import Literal, Optional
from datetime import datetime

Category = Literal['tech', 'politics', 'economy', 'sf-local']

CATEGORIES: tuple[Category, ...] = ('tech', 'politics', 'economy', 'sf-local')


class NewsArticle(BaseModel):
    """A fetched article. ``published_date`` is kept as the raw upstream string."""
    title: str
    url: str
    snippet: str
    published_date: str
    source: str

    class Config:
        frozen = True


class NewsSummary(BaseModel):
    """Schema the LLM must answer with for a category summary"""
    summary_short: str = Field(alias="summaryShort", min_length=1)
    summary_detailed: str = Field(alias="summaryDetailed", min_length=1)
    bullets: list[str] = Field(min_length=1)
    keywords: list[str] = Field(min_length=1)

    class Config:
        populate_by_name = True


class CategoryNews(BaseModel):
    """Schema for one category region of a weekly digest"""
    category: Category
    summary_short: str
    summary_detailed: str
    bullets: list[str]
    sources: list[NewsArticle] = Field(default_factory=list, max_length=10)
    keywords: list[str]


class WeeklyNewsResponse(BaseModel):
    """Schema for weekly news response"""
    id: int
    week_of: datetime
    tech: CategoryNews
    politics: CategoryNews
    economy: CategoryNews
    sf_local: CategoryNews
    weekly_keywords: list[str]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class WeekListItem(BaseModel):
    week_of: datetime
    label: str = ""


class AggregationReport(BaseModel):
    """Result of one weekly aggregation run"""
    week_of: datetime
    id: int
    stats: dict[str, int]
    outcomes: dict[str, str]
    sample: dict[str, list[dict[str, str]]]
