"""Shared test fixtures and configuration for backend tests."""
import pytest
from fastapi.testclient import TestClient

from filerelay.files.service import FileStore
from filerelay.main import app


@pytest.fixture
def store(tmp_path):
    """Install a FileStore rooted in a temp directory as the singleton."""
    FileStore.reset_instance()
    FileStore._instance = FileStore(root=str(tmp_path / "store"))
    yield FileStore._instance
    FileStore.reset_instance()


@pytest.fixture
def api_client(store):
    """Provide a TestClient for the main FastAPI app backed by a temp store."""
    return TestClient(app)
