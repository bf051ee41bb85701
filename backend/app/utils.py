"""Shared utilities used across the application."""

import base64
import binascii
import re

from app.exceptions import BadInputError

_DATA_URL_PREFIX = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+);base64,", re.IGNORECASE)


def parse_base64_image(value: str | None, name: str = "image") -> tuple[str, str]:
    """Validate a base64 image payload and strip any data URL prefix.

    Args:
        value: Raw base64 string, optionally ``data:<mime>;base64,``-prefixed
        name: Human-readable name for error messages

    Returns:
        Tuple of (base64 payload, MIME type). MIME type defaults to image/jpeg.

    Raises:
        BadInputError: If the value is missing or not valid base64
    """
    if not value or not value.strip():
        raise BadInputError(f"Missing {name} data")

    payload = value.strip()
    mime_type = "image/jpeg"
    match = _DATA_URL_PREFIX.match(payload)
    if match:
        mime_type = match.group("mime").lower()
        payload = payload[match.end():]

    payload = "".join(payload.split())
    try:
        base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError):
        raise BadInputError(f"Invalid {name} data") from None
    if not payload:
        raise BadInputError(f"Missing {name} data")

    return payload, mime_type


def _normalize_name(value: str | None) -> str:
    return " ".join((value or "").split()).casefold()


def names_match(
    first_name: str,
    last_name: str,
    record_first_name: str | None,
    record_last_name: str | None,
) -> bool | None:
    """Compare names read from a document with the names on file.

    Returns None when the document carried no name to compare.
    Only the names the document actually carried are compared.
    """
    if not (first_name or last_name):
        return None
    if first_name and _normalize_name(first_name) != _normalize_name(record_first_name):
        return False
    if last_name and _normalize_name(last_name) != _normalize_name(record_last_name):
        return False
    return True
