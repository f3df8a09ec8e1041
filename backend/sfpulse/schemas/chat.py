from pydantic import BaseModel, Field
from typing import Literal

from sfpulse.schemas.news import CategoryNews


class ChatMessage(BaseModel):
    role: Literal['user', 'assistant']
    content: str


class NewsQARequest(BaseModel):
    """Schema for a question about one category of a weekly digest"""
    question: str = Field(min_length=1)
    news: CategoryNews
    week_of: str
    conversation_history: list[ChatMessage] = Field(default_factory=list)


class EventChatContext(BaseModel):
    headline: str
    week_of: str
    hype_content: str
    backlash_content: str
    summary: str


class ChatbotRequest(BaseModel):
    """Schema for a conversation about a timeline event"""
    messages: list[ChatMessage] = Field(min_length=1)
    context: EventChatContext
