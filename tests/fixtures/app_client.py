"""Application fixtures for tests."""
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from upload_api.config.settings import Settings
from upload_api.main import create_app


@pytest.fixture
def storage_dir(tmp_path: Path) -> Path:
    return tmp_path / "upload"


@pytest.fixture
def settings(storage_dir: Path) -> Settings:
    return Settings(storage_dir=str(storage_dir))


@pytest.fixture
def client(settings: Settings):
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client
