"""Member record lookup in Firestore."""

import json
import logging
from typing import Any

from google.api_core import exceptions as google_exceptions
from google.cloud import firestore
from google.cloud.firestore_v1.base_query import FieldFilter
from google.oauth2 import service_account

from app.config import settings
from app.exceptions import UpstreamProviderError

logger = logging.getLogger(__name__)

_client: firestore.AsyncClient | None = None


def get_client() -> firestore.AsyncClient:
    """Get or create the Firestore client from the service account settings."""
    global _client
    if _client is None:
        if not settings.firebase_service_account:
            raise UpstreamProviderError(
                "Record store is not configured (FIREBASE_SERVICE_ACCOUNT)."
            )
        try:
            info = json.loads(settings.firebase_service_account)
            credentials = service_account.Credentials.from_service_account_info(info)
        except (ValueError, KeyError) as e:
            raise UpstreamProviderError("Invalid FIREBASE_SERVICE_ACCOUNT credentials.") from e
        _client = firestore.AsyncClient(
            project=settings.firebase_project_id or info.get("project_id"),
            credentials=credentials,
        )
    return _client


async def close_client() -> None:
    """Drop the client (gRPC channels are released with it)."""
    global _client
    _client = None


class RecordStore:
    """Exact-match lookups against one Firestore collection."""

    def __init__(
        self,
        client: firestore.AsyncClient | None = None,
        collection: str | None = None,
        id_field: str | None = None,
    ):
        self._client = client
        self.collection = collection or settings.records_collection
        self.id_field = id_field or settings.records_id_field

    @property
    def client(self) -> firestore.AsyncClient:
        if self._client is None:
            self._client = get_client()
        return self._client

    async def find_by_identifier(self, identifier: str) -> dict[str, Any] | None:
        """Return the first record whose id field equals ``identifier``, or None."""
        query = (
            self.client.collection(self.collection)
            .where(filter=FieldFilter(self.id_field, "==", identifier))
            .limit(1)
        )
        try:
            async for snapshot in query.stream():
                return snapshot.to_dict()
        except google_exceptions.GoogleAPIError as e:
            logger.error(f"Record store query failed: {e}")
            raise UpstreamProviderError("Record store query failed.") from e
        return None
