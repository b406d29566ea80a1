import pytest
from fastapi.testclient import TestClient

from storefront.config import Settings
from storefront.main import create_app


@pytest.fixture
def settings():
    # minimum bcrypt cost keeps the suite fast
    return Settings(bcrypt_rounds=4, secret_key="test-secret")


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def token(client):
    client.post("/api/signup", json={"username": "alice", "password": "wonderland"})
    r = client.post("/api/login", json={"username": "alice", "password": "wonderland"})
    return r.json()["accessToken"]


@pytest.fixture
def auth(token):
    return {"Authorization": f"Bearer {token}"}
