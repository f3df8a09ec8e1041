from pydantic import BaseModel
from typing import Any, Optional


class APIResponse(BaseModel):
    """Standard API response wrapper"""
    success: bool
    data: Optional[Any] = None
    error: Optional[str] = None
    message: Optional[str] = None


class ErrorResponse(BaseModel):
    """Body returned for every handled error"""
    success: bool = False
    error: str
    code: str
    details: Optional[dict] = None


class HealthCheckResponse(BaseModel):
    """Schema for health check response"""
    status: str
    timestamp: str
    database: str
    llm: str
    weeks_stored: int = 0
    events_stored: int = 0
