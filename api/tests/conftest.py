from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

from app.main import app
from app.models.user import User
from app.repositories import ListRepository, UserRepository
from app.services.destination_catalog import DestinationCatalog
from app.utils.mongodb import get_mongodb

DATA_PATH = Path(__file__).resolve().parents[2] / "data" / "europe-destinations.csv"


@pytest.fixture(scope="session")
def catalog():
    return DestinationCatalog.load(DATA_PATH)


@pytest.fixture
def mongo_db():
    return AsyncMongoMockClient()["wanderlist_test"]


@pytest.fixture
def list_repository(mongo_db):
    return ListRepository(mongo_db)


@pytest.fixture
def user_repository(mongo_db):
    return UserRepository(mongo_db)


@pytest.fixture
def owner():
    return User(email="owner@example.com", nickname="Owner")


@pytest.fixture
def stranger():
    return User(email="stranger@example.com", nickname="Stranger")


@pytest.fixture
async def client(mongo_db, catalog):
    app.dependency_overrides[get_mongodb] = lambda: mongo_db
    app.state.catalog = catalog
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
    app.state.catalog = None


async def register_and_login(client, email, nickname="Traveller", password="secret123"):
    response = await client.post(
        "/auth/register",
        json={"email": email, "nickname": nickname, "password": password},
    )
    assert response.status_code == 201, response.text
    response = await client.post("/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    token = response.json()["access_token"]
    return {"Authorization": f"Bearer {token}"}
