"""
pytest configuration and fixtures.
"""

import sqlite3
from typing import Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from users_api.app.core.db import Database
from users_api.app.main import create_app


@pytest.fixture
def database(tmp_path) -> Database:
    """Database backed by a fresh file with the schema in place."""
    db = Database(str(tmp_path / "users.db"))
    db.init_schema()
    return db


@pytest.fixture
def app(database: Database) -> FastAPI:
    return create_app(database=database)


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def user_payload() -> dict:
    """A creation payload that passes validation."""
    return {"email": "jane@example.com", "password": "longenough", "name": "Jane"}


@pytest.fixture
def stored_row(database: Database):
    """Read a raw row, password included, straight from the table."""

    def read(user_id: int) -> dict:
        conn = sqlite3.connect(database.path)
        conn.row_factory = sqlite3.Row
        try:
            row = conn.execute("SELECT * FROM user WHERE id = ?", (user_id,)).fetchone()
            return dict(row) if row else None
        finally:
            conn.close()

    return read


@pytest.fixture
def drop_user_table(database: Database):
    """Remove the ``user`` table so every query against it fails."""

    def drop() -> None:
        conn = sqlite3.connect(database.path)
        try:
            conn.execute("DROP TABLE user")
            conn.commit()
        finally:
            conn.close()

    return drop
