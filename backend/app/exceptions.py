"""Exception taxonomy for verification requests.

Distinguishes between bad client input, missing records, and failures of an
upstream provider (OCR, face matching, push relay, record store).
"""


class VerificationError(Exception):
    """Base class for request-level verification errors."""

    status_code = 500
    category = "internal_error"

    def __init__(self, message: str, extra: dict | None = None):
        super().__init__(message)
        self.message = message
        self.extra = extra or {}

    def to_content(self) -> dict:
        """Render the JSON body returned to the client."""
        return {"error": self.category, "message": self.message, **self.extra}


class BadInputError(VerificationError):
    """The request cannot be processed as sent.

    Examples: missing image, invalid base64, not a jurisdiction document.
    """

    status_code = 400
    category = "bad_input"


class RecordNotFoundError(VerificationError):
    """No member record matches the scanned document."""

    status_code = 404
    category = "not_found"


class UpstreamProviderError(VerificationError):
    """An external provider failed or returned nothing usable.

    Examples: OCR returned no text, network timeout, provider not configured.
    """

    status_code = 502
    category = "upstream_error"
