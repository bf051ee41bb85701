"""Middleware components for request validation and protection."""

from app.middleware.rate_limit import get_client_key, limiter
from app.middleware.size_limit import RequestSizeLimitMiddleware

__all__ = [
    "RequestSizeLimitMiddleware",
    "limiter",
    "get_client_key",
]
