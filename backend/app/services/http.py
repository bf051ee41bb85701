"""Shared outbound HTTP client for provider calls."""

import httpx

from app.config import settings

# Module-level HTTP client for connection reuse
_http_client: httpx.AsyncClient | None = None


def get_http_client() -> httpx.AsyncClient:
    """Get shared HTTP client for connection reuse."""
    global _http_client
    if _http_client is None:
        _http_client = httpx.AsyncClient(timeout=settings.http_timeout_seconds)
    return _http_client


async def close_http_client() -> None:
    """Close the shared client. Called on application shutdown."""
    global _http_client
    if _http_client is not None:
        await _http_client.aclose()
        _http_client = None
