"""Tests for the Firestore record store."""

from unittest.mock import MagicMock, patch

import pytest
from google.api_core import exceptions as google_exceptions

from app.exceptions import UpstreamProviderError
from app.services import records
from app.services.records import RecordStore


def make_client(documents: list[dict], error: Exception | None = None) -> MagicMock:
    """Build a Firestore client mock whose query streams ``documents``."""

    async def stream():
        if error is not None:
            raise error
        for data in documents:
            snapshot = MagicMock()
            snapshot.to_dict.return_value = data
            yield snapshot

    query = MagicMock()
    query.stream.side_effect = lambda: stream()
    client = MagicMock()
    client.collection.return_value.where.return_value.limit.return_value = query
    return client


class TestRecordStore:
    """Tests for RecordStore.find_by_identifier."""

    @pytest.mark.asyncio
    async def test_returns_first_match(self):
        client = make_client([{"PWD_ID_NO": "0645201000123", "FirstName": "Juan"}, {"x": 1}])
        store = RecordStore(client=client, collection="EPWD", id_field="PWD_ID_NO")

        member = await store.find_by_identifier("0645201000123")

        assert member == {"PWD_ID_NO": "0645201000123", "FirstName": "Juan"}
        client.collection.assert_called_once_with("EPWD")
        field_filter = client.collection.return_value.where.call_args.kwargs["filter"]
        assert field_filter.field_path == "PWD_ID_NO"
        assert field_filter.op_string == "=="
        assert field_filter.value == "0645201000123"
        client.collection.return_value.where.return_value.limit.assert_called_once_with(1)

    @pytest.mark.asyncio
    async def test_no_match(self):
        store = RecordStore(client=make_client([]))

        assert await store.find_by_identifier("0000000000000") is None

    @pytest.mark.asyncio
    async def test_defaults_from_settings(self):
        store = RecordStore(client=make_client([]))

        assert store.collection == "EPWD"
        assert store.id_field == "PWD_ID_NO"

    @pytest.mark.asyncio
    async def test_store_error_is_upstream(self):
        client = make_client([], error=google_exceptions.ServiceUnavailable("down"))
        store = RecordStore(client=client)

        with pytest.raises(UpstreamProviderError, match="Record store query failed."):
            await store.find_by_identifier("0645201000123")


class TestGetClient:
    """Tests for Firestore client construction."""

    def test_not_configured(self):
        with (
            patch.object(records.settings, "firebase_service_account", ""),
            patch.object(records, "_client", None),
        ):
            with pytest.raises(UpstreamProviderError, match="FIREBASE_SERVICE_ACCOUNT"):
                records.get_client()

    def test_invalid_credentials(self):
        with (
            patch.object(records.settings, "firebase_service_account", "{not json"),
            patch.object(records, "_client", None),
        ):
            with pytest.raises(UpstreamProviderError, match="Invalid"):
                records.get_client()
