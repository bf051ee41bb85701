"""Request body size limit middleware."""

import logging

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from app.config import settings

logger = logging.getLogger(__name__)


class RequestSizeLimitMiddleware(BaseHTTPMiddleware):
    """Reject request bodies larger than the configured maximum.

    Photos arrive base64-encoded inside JSON, so the limit is checked against
    the Content-Length header before the body is read.
    """

    def __init__(self, app, max_size: int | None = None):
        super().__init__(app)
        self.max_size = max_size or settings.max_request_size_bytes

    async def dispatch(self, request: Request, call_next):
        content_length = request.headers.get("content-length")
        if not content_length:
            return await call_next(request)

        try:
            size = int(content_length)
        except ValueError:
            return JSONResponse(
                status_code=400,
                content={"error": "bad_input", "message": "Invalid Content-Length header"},
            )

        if size > self.max_size:
            logger.warning(
                f"Request body too large: {size} bytes (max: {self.max_size})",
                extra={"content_length": size, "path": request.url.path},
            )
            return JSONResponse(
                status_code=413,
                content={
                    "error": "bad_input",
                    "message": f"Request body exceeds maximum size of {self.max_size} bytes",
                },
            )

        return await call_next(request)
