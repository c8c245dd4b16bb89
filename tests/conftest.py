import pytest
from unittest.mock import MagicMock

from fastapi.testclient import TestClient

from drivegate.config import Settings
from drivegate.context import GatewayContext, get_context
from drivegate.services.drive import DriveService


# --- Canned API responses ---

DRIVE_API_FILE = {
    "id": "file123",
    "name": "prompt.md",
    "webViewLink": "https://drive.google.com/file/d/file123/view",
    "createdTime": "2025-01-01T00:00:00Z",
}

DRIVE_API_UPLOADED = {
    "id": "file123",
    "name": "prompt.md",
    "webViewLink": "https://drive.google.com/file/d/file123/view",
}

DRIVE_API_LIST = {
    "files": [
        DRIVE_API_FILE,
        {"id": "file456", "name": "notes.md", "webViewLink": "https://drive.google.com/file/d/file456/view"},
    ],
}


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        client_id="client-id",
        client_secret="client-secret",
        refresh_token="refresh-token",
    )


@pytest.fixture
def mock_drive_resource():
    """Drive v3 resource whose calls return canned payloads."""
    resource = MagicMock()
    resource.files.return_value.create.return_value.execute.return_value = DRIVE_API_UPLOADED
    resource.files.return_value.list.return_value.execute.return_value = DRIVE_API_LIST
    resource.permissions.return_value.create.return_value.execute.return_value = {"id": "anyoneWithLink"}
    return resource


@pytest.fixture
def drive_service(mock_drive_resource):
    return DriveService(mock_drive_resource)


@pytest.fixture
def mock_drive():
    """Stand-in for DriveService used by transport tests."""
    return MagicMock(spec=DriveService)


@pytest.fixture
def api_client(settings, mock_drive):
    """TestClient with the gateway context replaced by a fake Drive."""
    from drivegate.main import app

    app.dependency_overrides[get_context] = lambda: GatewayContext(settings=settings, drive=mock_drive)
    yield TestClient(app)
    app.dependency_overrides.clear()
