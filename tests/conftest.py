import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.database import ProductStore
from app.main import create_app

API_KEY = "test-key"


@pytest.fixture
def store():
    return ProductStore()


@pytest.fixture
def app(store):
    return create_app(settings=Settings(api_key=API_KEY), store=store)


@pytest.fixture
def client(app):
    c = TestClient(app)
    c.headers.update({"x-api-key": API_KEY})
    return c


@pytest.fixture
def anon_client(app):
    return TestClient(app)
