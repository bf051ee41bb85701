"""Push-notification relay to the Expo push service."""

import logging
from typing import Any

import httpx

from app.config import settings
from app.exceptions import UpstreamProviderError
from app.services.http import get_http_client

logger = logging.getLogger(__name__)


class PushService:
    """Forward a notification to the delivery provider and return its reply as-is."""

    def __init__(self, api_url: str | None = None, access_token: str | None = None):
        self.api_url = api_url or settings.push_api_url
        self.access_token = (
            access_token if access_token is not None else settings.push_access_token
        )

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json", "Content-Type": "application/json"}
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        return headers

    async def send(
        self,
        token: str,
        title: str,
        body: str,
        data: dict[str, Any] | None = None,
    ) -> Any:
        """Send one notification. No retries; delivery semantics belong to the provider."""
        message = {"to": token, "title": title, "body": body, "data": data or {}}

        client = get_http_client()
        try:
            response = await client.post(self.api_url, json=message, headers=self._headers())
            result = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Push relay request failed: {e}")
            raise UpstreamProviderError("Push provider request failed.") from e

        logger.info(
            f"Push relayed (provider status {response.status_code})",
            extra={"status_code": response.status_code},
        )
        return result
