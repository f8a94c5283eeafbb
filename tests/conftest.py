# tests/conftest.py
import json

import pytest
from fastapi.testclient import TestClient

from storefront.config import Settings
from storefront.main import create_app

ADMIN_KEY = "test-admin-key-0123456789"
ADMIN = {"x-admin-key": ADMIN_KEY}


@pytest.fixture
def settings(tmp_path):
    return Settings(admin_api_key=ADMIN_KEY, data_dir=tmp_path)


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def seed(settings):
    """Write records straight to a store's backing file."""
    def _seed(name, records):
        path = settings.data_dir / f"{name}.json"
        path.write_text(json.dumps(records))
        return records
    return _seed


@pytest.fixture
def read_store(settings):
    def _read(name):
        return json.loads((settings.data_dir / f"{name}.json").read_text())
    return _read
