"""Face++ compare client."""

import logging
from dataclasses import dataclass, field

import httpx

from app.config import settings
from app.exceptions import BadInputError, UpstreamProviderError
from app.services.http import get_http_client

logger = logging.getLogger(__name__)


@dataclass
class FaceComparison:
    confidence: float | None
    thresholds: dict = field(default_factory=dict)


class FaceService:
    """Compare a selfie against a profile photo."""

    def __init__(
        self,
        api_key: str | None = None,
        api_secret: str | None = None,
        api_url: str | None = None,
    ):
        self.api_key = api_key if api_key is not None else settings.face_api_key
        self.api_secret = api_secret if api_secret is not None else settings.face_api_secret
        self.api_url = api_url or settings.face_api_url

    async def compare(self, selfie_base64: str, profile_base64: str) -> FaceComparison:
        """
        Ask the provider how likely two photos show the same person.

        Raises:
            BadInputError: If the provider rejected one of the images
            UpstreamProviderError: If the provider is unreachable or misconfigured
        """
        if not (self.api_key and self.api_secret):
            raise UpstreamProviderError(
                "Face provider is not configured (FACE_API_KEY, FACE_API_SECRET)."
            )

        client = get_http_client()
        try:
            response = await client.post(
                self.api_url,
                data={
                    "api_key": self.api_key,
                    "api_secret": self.api_secret,
                    "image_base64_1": selfie_base64,
                    "image_base64_2": profile_base64,
                },
            )
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Face compare request failed: {e}")
            raise UpstreamProviderError("Face provider request failed.") from e

        error_message = data.get("error_message")
        if error_message:
            logger.warning(
                f"Face provider error: {error_message}",
                extra={"status_code": response.status_code},
            )
            # 400 from Face++ means one of the images was unusable
            if response.status_code == 400:
                raise BadInputError(error_message)
            raise UpstreamProviderError(error_message)

        if response.is_error:
            raise UpstreamProviderError(
                f"Face provider returned HTTP {response.status_code}."
            )

        return FaceComparison(
            confidence=data.get("confidence"),
            thresholds=data.get("thresholds") or {},
        )
