from typing import Optional
from fastapi import Header
from loguru import logger

from sfpulse.config import settings
from sfpulse.errors import ConfigurationError, UnauthorizedError


async def verify_cron_secret(authorization: Optional[str] = Header(None)):
    """
    Dependency guarding trigger endpoints with ``Authorization: Bearer <CRON_SECRET>``

    Raises:
        ConfigurationError: CRON_SECRET is not set on the server
        UnauthorizedError: Header missing or wrong
    """
    if not settings.CRON_SECRET:
        logger.error("CRON_SECRET is not configured")
        raise ConfigurationError("Server configuration error", code="CONFIGURATION_ERROR")

    if authorization != f"Bearer {settings.CRON_SECRET}":
        logger.error("Unauthorized cron request")
        raise UnauthorizedError("Unauthorized")
