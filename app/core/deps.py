import logging
import secrets
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from redis.exceptions import RedisError

from app.core.config import Settings
from app.core.exceptions import AuthenticationError, RateLimitError
from app.utils.rate_limiter import allow_for_client

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def require_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    settings: Settings = Depends(get_settings),
) -> None:
    """Gate admin-facing reads behind ADMIN_API_TOKEN when one is configured."""
    expected = settings.ADMIN_API_TOKEN
    if not expected:
        return
    token = credentials.credentials if credentials else ""
    if not secrets.compare_digest(token.encode(), expected.encode()):
        raise AuthenticationError("Admin authentication required")


def waitlist_rate_limit(request: Request) -> None:
    """Per-IP limit on waitlist registrations; 0 disables it."""
    settings = get_settings(request)
    limit = settings.WAITLIST_RATE_LIMIT_PER_MINUTE
    if limit <= 0:
        return
    client_ip = request.client.host if request.client else "unknown"
    try:
        allowed = allow_for_client(settings.REDIS_URL, "waitlist", client_ip, limit, 60)
    except RedisError as e:
        logger.warning("Rate limiter unavailable, allowing request: %s", e)
        return
    if not allowed:
        raise RateLimitError("Too many requests, please try again later.")
