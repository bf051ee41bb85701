"""Test configuration and fixtures."""

import base64
import os
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

# Override settings before importing app modules
os.environ["JURISDICTION_KEYWORD"] = "Silay"
os.environ["OCR_API_KEY"] = "test-ocr-key"
os.environ["FACE_API_KEY"] = "test-face-key"
os.environ["FACE_API_SECRET"] = "test-face-secret"
os.environ["FIREBASE_SERVICE_ACCOUNT"] = ""
os.environ["RATE_LIMIT_ENABLED"] = "false"

from app.routes.face import get_face_service
from app.routes.push import get_push_service
from app.routes.scan import get_ocr_service, get_record_store
from app.services.face import FaceComparison
from main import app

SILAY_ID_TEXT = (
    "CITY OF SILAY\n"
    "PWD ID\n"
    "NAME: Juan Miguel Dela Cruz\n"
    "ID NO: 0645201000123\n"
)


@pytest.fixture
def image_b64() -> str:
    """A small base64 payload standing in for a JPEG."""
    return base64.b64encode(b"\xff\xd8\xff\xe0fake-jpeg-bytes").decode()


@pytest.fixture
def member_record() -> dict:
    return {
        "PWD_ID_NO": "0645201000123",
        "FirstName": "Juan",
        "LastName": "Dela Cruz",
        "Disability": "Orthopedic",
    }


@pytest.fixture
def mock_ocr():
    """OCR service returning a Silay ID card."""
    ocr = MagicMock()
    ocr.extract_text = AsyncMock(return_value=SILAY_ID_TEXT)
    return ocr


@pytest.fixture
def mock_records(member_record):
    """Record store that finds the member."""
    records = MagicMock()
    records.find_by_identifier = AsyncMock(return_value=member_record)
    return records


@pytest.fixture
def mock_face():
    faces = MagicMock()
    faces.compare = AsyncMock(
        return_value=FaceComparison(
            confidence=92.5,
            thresholds={"1e-3": 62.327, "1e-4": 69.101, "1e-5": 73.975},
        )
    )
    return faces


@pytest.fixture
def mock_push():
    push = MagicMock()
    push.send = AsyncMock(return_value={"data": {"status": "ok", "id": "ticket-1"}})
    return push


@pytest.fixture
def client(mock_ocr, mock_records, mock_face, mock_push):
    """Test client with every provider replaced by a mock."""
    app.dependency_overrides[get_ocr_service] = lambda: mock_ocr
    app.dependency_overrides[get_record_store] = lambda: mock_records
    app.dependency_overrides[get_face_service] = lambda: mock_face
    app.dependency_overrides[get_push_service] = lambda: mock_push
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
    app.dependency_overrides.clear()
