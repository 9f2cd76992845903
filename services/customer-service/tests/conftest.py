"""
Pytest fixtures for customer service tests
"""

import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.main import create_app
from app.services.account_service import AccountService
from app.services.item_service import ItemService
from app.utils.memory_store import InMemoryAccountStore, InMemoryItemStore

# Lowest bcrypt work factor keeps the suite fast
TEST_BCRYPT_ROUNDS = 4


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings for an in-memory application writing uploads to tmp_path"""
    return Settings(
        _env_file=None,
        store_backend="memory",
        bcrypt_rounds=TEST_BCRYPT_ROUNDS,
        upload_dir=str(tmp_path / "images"),
        max_upload_bytes=1024,
    )


@pytest.fixture
def account_store() -> InMemoryAccountStore:
    return InMemoryAccountStore()


@pytest.fixture
def account_service(account_store) -> AccountService:
    return AccountService(account_store, bcrypt_rounds=TEST_BCRYPT_ROUNDS)


@pytest.fixture
def item_service() -> ItemService:
    return ItemService(InMemoryItemStore())


@pytest.fixture
def client(settings):
    """Test client; entering it runs the lifespan that builds the stores"""
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def registered(client):
    """An account registered through the API"""
    response = client.post("/accounts", json={
        "username": "alice",
        "password": "s3cret",
        "firstName": "Alice",
        "lastName": "Liddell",
    })
    assert response.status_code == 200
    return response.json()
