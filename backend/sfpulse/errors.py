"""
Application error hierarchy.

Every error raised on purpose inside the service is an ``AppError``; the
FastAPI exception handler in ``sfpulse.main`` turns it into the standard
``{"success": false, "error": ..., "code": ...}`` envelope using
``status_code``.
"""
from typing import Any, Optional


class AppError(Exception):
    """Base class for application-specific errors"""

    code = "INTERNAL_ERROR"
    status_code = 500

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


class ValidationFailedError(AppError):
    code = "VALIDATION_FAILED"
    status_code = 400


class UnauthorizedError(AppError):
    code = "UNAUTHORIZED"
    status_code = 401


class NotFoundError(AppError):
    code = "RECORD_NOT_FOUND"
    status_code = 404


class DuplicateRecordError(AppError):
    code = "DUPLICATE_RECORD"
    status_code = 409


class ConfigurationError(AppError):
    code = "API_KEY_MISSING"
    status_code = 500


class UpstreamError(AppError):
    """An external API failed or answered with a non-2xx status"""
    code = "API_REQUEST_FAILED"
    status_code = 502


class UpstreamUnavailableError(UpstreamError):
    code = "NETWORK_ERROR"
    status_code = 503


class LLMResponseError(UpstreamError):
    """The LLM answered, but not with JSON matching the expected schema"""
    code = "API_INVALID_RESPONSE"


class NoArticlesFoundError(UpstreamError):
    code = "NO_ARTICLES_FOUND"


def upstream_error_for_status(api_name: str, status_code: int, body: str = "") -> UpstreamError:
    """Map an upstream HTTP status to the matching error"""
    details = {"api": api_name, "upstream_status": status_code, "body": body[:500]}

    if status_code == 401:
        return UpstreamError(f"{api_name} API key is invalid or missing", details=details)
    if status_code == 429:
        return UpstreamUnavailableError(
            f"{api_name} API rate limit exceeded", code="API_RATE_LIMITED", details=details
        )
    if status_code >= 500:
        return UpstreamUnavailableError(f"{api_name} API server error ({status_code})", details=details)
    return UpstreamError(f"{api_name} API request failed ({status_code})", details=details)
