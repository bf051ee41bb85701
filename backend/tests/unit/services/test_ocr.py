"""Tests for the OCR.space client."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from app.exceptions import UpstreamProviderError
from app.services.ocr import OCRService

OCR_URL = "https://api.ocr.space/parse/image"


def ocr_response(payload: dict, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, json=payload, request=httpx.Request("POST", OCR_URL))


@pytest.fixture
def mock_http():
    """Patch the shared HTTP client used by the OCR service."""
    client = MagicMock()
    client.post = AsyncMock()
    with patch("app.services.ocr.get_http_client", return_value=client):
        yield client


@pytest.fixture
def service():
    return OCRService(api_key="test-key", api_url=OCR_URL, engine="2")


class TestOCRService:
    """Tests for OCRService.extract_text."""

    @pytest.mark.asyncio
    async def test_returns_parsed_text(self, service, mock_http):
        mock_http.post.return_value = ocr_response(
            {"ParsedResults": [{"ParsedText": "SILAY CITY\r\n0645201000123"}]}
        )

        text = await service.extract_text("QUJD", "image/png")

        assert text == "SILAY CITY\r\n0645201000123"
        _, kwargs = mock_http.post.call_args
        assert kwargs["data"] == {
            "apikey": "test-key",
            "OCREngine": "2",
            "base64Image": "data:image/png;base64,QUJD",
        }

    @pytest.mark.asyncio
    async def test_no_results_is_an_error(self, service, mock_http):
        mock_http.post.return_value = ocr_response({"ParsedResults": []})

        with pytest.raises(UpstreamProviderError, match="OCR failed to extract text."):
            await service.extract_text("QUJD")

    @pytest.mark.asyncio
    async def test_provider_error_message(self, service, mock_http):
        mock_http.post.return_value = ocr_response(
            {"IsErroredOnProcessing": True, "ErrorMessage": ["File failed validation."]}
        )

        with pytest.raises(UpstreamProviderError, match="File failed validation."):
            await service.extract_text("QUJD")

    @pytest.mark.asyncio
    async def test_http_error_status(self, service, mock_http):
        mock_http.post.return_value = ocr_response({}, status_code=500)

        with pytest.raises(UpstreamProviderError, match="request failed"):
            await service.extract_text("QUJD")
        assert mock_http.post.await_count == 1

    @pytest.mark.asyncio
    async def test_retries_transport_errors(self, service, mock_http):
        mock_http.post.side_effect = [
            httpx.ConnectError("connection reset"),
            ocr_response({"ParsedResults": [{"ParsedText": "SILAY"}]}),
        ]

        assert await service.extract_text("QUJD") == "SILAY"
        assert mock_http.post.await_count == 2

    @pytest.mark.asyncio
    async def test_not_configured(self, mock_http):
        service = OCRService(api_key="")

        with pytest.raises(UpstreamProviderError, match="OCR_API_KEY"):
            await service.extract_text("QUJD")
        mock_http.post.assert_not_awaited()
