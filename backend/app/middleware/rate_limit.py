"""Rate limiting middleware using SlowAPI."""

import logging

from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from app.config import settings

logger = logging.getLogger(__name__)


def get_client_key(request: Request) -> str:
    """Rate-limit key: the client's address (the service has no user sessions)."""
    return f"ip:{get_remote_address(request)}"


limiter = Limiter(
    key_func=get_client_key,
    storage_uri=settings.rate_limit_storage_uri,
    default_limits=[f"{settings.rate_limit_general_per_minute}/minute"],
    headers_enabled=False,
    enabled=settings.rate_limit_enabled,
)


def rate_limit_scan():
    """Decorator for the document scan endpoint."""
    return limiter.limit(f"{settings.rate_limit_scan_per_minute}/minute")


def rate_limit_face():
    """Decorator for the face verification endpoint."""
    return limiter.limit(f"{settings.rate_limit_face_per_minute}/minute")


def rate_limit_push():
    """Decorator for the push relay endpoint."""
    return limiter.limit(f"{settings.rate_limit_push_per_minute}/minute")
