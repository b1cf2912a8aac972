"""Pytest configuration and shared fixtures."""

import os
from collections.abc import Generator

# Settings are read at import time
os.environ["ENV"] = "test"
os.environ["MONGODB_ENSURE_INDEXES"] = "false"
os.environ.setdefault("JWT_SECRET", "test-secret")

import mongomock
import pytest
from fastapi.testclient import TestClient
from pymongo.database import Database

from app.core.dependencies import get_current_user
from app.db.mongo import ensure_indexes, get_db
from app.main import app
from app.models.question import QUESTIONS_COLLECTION

ADMIN_CLAIMS = {"sub": "devadmin", "email": "admin@preplens.com", "role": "admin"}


@pytest.fixture
def db() -> Generator[Database, None, None]:
    """In-memory document store, fresh for every test."""
    client = mongomock.MongoClient()
    database = client["preplens_test"]
    ensure_indexes(database)
    try:
        yield database
    finally:
        client.close()


@pytest.fixture
def questions(db: Database):
    return db[QUESTIONS_COLLECTION]


@pytest.fixture
def anon_client(db: Database):
    """TestClient with the store override only (real auth)."""
    app.dependency_overrides[get_db] = lambda: db
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def client(db: Database):
    """TestClient with store and authenticated-admin overrides."""
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_current_user] = lambda: dict(ADMIN_CLAIMS)
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.dependency_overrides.clear()

