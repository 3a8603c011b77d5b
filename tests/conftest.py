"""
Shared pytest fixtures: file-backed SQLite pool + FastAPI TestClient.
"""
import pytest
from fastapi.testclient import TestClient

from payables.config import Settings
from payables.database import ConnectionPool, provision_schema
from payables.main import create_app

POOL_SIZE = 3


@pytest.fixture()
def db_url(tmp_path):
    # a file, not :memory:, so every pooled connection sees the same database
    return f"sqlite:///{tmp_path / 'payables.db'}"


@pytest.fixture()
def settings(db_url):
    return Settings(
        DATABASE_URL=db_url,
        DB_POOL_SIZE=POOL_SIZE,
        CORS_ORIGINS=["https://app.example.com"],
    )


@pytest.fixture()
def pool(db_url):
    p = ConnectionPool(db_url, size=POOL_SIZE)
    yield p
    p.dispose()


@pytest.fixture()
def provisioned_pool(pool):
    provision_schema(pool)
    return pool


@pytest.fixture()
def app(settings, pool):
    return create_app(settings, pool=pool)


@pytest.fixture()
def client(app):
    with TestClient(app) as c:
        yield c
