import pytest
from fastapi.testclient import TestClient

from m3u_backend.api.main import create_app
from m3u_backend.application.config import Settings
from m3u_backend.infrastructure.reference_store import ReferenceStore


@pytest.fixture
def settings(tmp_path):
    return Settings(
        uploads_dir=tmp_path / "uploads",
        data_file=tmp_path / "data.json",
        public_base_url="http://192.168.1.10:3000",
    )


@pytest.fixture
def client(settings):
    return TestClient(create_app(settings))


@pytest.fixture
def store(tmp_path):
    s = ReferenceStore(tmp_path / "data.json")
    s.load()
    return s
