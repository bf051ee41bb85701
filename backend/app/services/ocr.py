"""OCR.space client: image in, plain text out."""

import logging

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from app.config import settings
from app.exceptions import UpstreamProviderError
from app.services.http import get_http_client

logger = logging.getLogger(__name__)


class OCRService:
    """Extract text from a photographed document via OCR.space."""

    def __init__(
        self,
        api_key: str | None = None,
        api_url: str | None = None,
        engine: str | None = None,
    ):
        self.api_key = api_key if api_key is not None else settings.ocr_api_key
        self.api_url = api_url or settings.ocr_api_url
        self.engine = engine or settings.ocr_engine

    async def extract_text(self, base64_image: str, mime_type: str = "image/jpeg") -> str:
        """
        Run OCR on a base64-encoded image.

        Args:
            base64_image: Image bytes, base64-encoded, without a data URL prefix
            mime_type: Image MIME type used to build the data URL

        Returns:
            The parsed text of the first result

        Raises:
            UpstreamProviderError: If OCR is not configured, the call fails,
                or no text was found
        """
        if not self.api_key:
            raise UpstreamProviderError("OCR provider is not configured (OCR_API_KEY).")

        try:
            data = await self._post(base64_image, mime_type)
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"OCR request failed: {e}")
            raise UpstreamProviderError("OCR provider request failed.") from e

        if data.get("IsErroredOnProcessing"):
            detail = data.get("ErrorMessage") or "unknown error"
            if isinstance(detail, list):
                detail = "; ".join(str(d) for d in detail)
            logger.warning(f"OCR provider reported an error: {detail}")
            raise UpstreamProviderError(f"OCR failed: {detail}")

        results = data.get("ParsedResults") or []
        if not results:
            raise UpstreamProviderError("OCR failed to extract text.")

        text = results[0].get("ParsedText") or ""
        logger.info(f"OCR returned {len(text)} characters")
        return text

    @retry(
        retry=retry_if_exception_type(httpx.TransportError),
        stop=stop_after_attempt(settings.ocr_max_attempts),
        wait=wait_exponential(multiplier=1, min=1, max=8),
        reraise=True,
    )
    async def _post(self, base64_image: str, mime_type: str) -> dict:
        client = get_http_client()
        response = await client.post(
            self.api_url,
            data={
                "apikey": self.api_key,
                "OCREngine": self.engine,
                "base64Image": f"data:{mime_type};base64,{base64_image}",
            },
        )
        response.raise_for_status()
        return response.json()
