# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up test environment variables before any imports
# - In-memory SQLite database (aiosqlite) with the full schema per test
# - httpx AsyncClient talking to the app through ASGITransport
# - Helpers to seed users/items and to log in
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

os.environ["DATABASE_URL"] = TEST_DATABASE_URL
os.environ.setdefault("SESSION_KEYS", "test-signing-key-0001,test-previous-key-0002")
os.environ.setdefault("ENVIRONMENT", "development")

import random
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.main import create_app
from lib.database import Database


# =============================================================================
# Database
# =============================================================================

class Seeder:
    """Inserts test rows with plain parameterized SQL."""

    def __init__(self, db: Database):
        self.db = db

    async def user(
        self,
        username: str,
        super_seller: bool = False,
        email: str | None = None,
    ) -> int:
        row = await self.db.fetch_one(
            """
            INSERT INTO users (username, email, super_seller)
            VALUES (:username, :email, :super_seller)
            RETURNING id
            """,
            {
                "username": username,
                "email": email or f"{username}@example.com",
                "super_seller": super_seller,
            },
        )
        return row["id"]

    async def item(
        self,
        owner_id: int,
        title: str,
        price: int = 1000,
        sold: bool = False,
        photos: tuple[str, ...] = ("https://example.com/photo.jpg",),
        description: str | None = None,
    ) -> int:
        row = await self.db.fetch_one(
            """
            INSERT INTO items (owner_id, title, description, price, sold_status)
            VALUES (:owner_id, :title, :description, :price, :sold)
            RETURNING id
            """,
            {
                "owner_id": owner_id,
                "title": title,
                "description": description,
                "price": price,
                "sold": sold,
            },
        )
        for photo_url in photos:
            await self.db.query(
                "INSERT INTO photo_urls (item_id, photo_url) VALUES (:item_id, :photo_url)",
                {"item_id": row["id"], "photo_url": photo_url},
            )
        return row["id"]

    async def count(self, table: str, **where: Any) -> int:
        # Table names come from the tests themselves, never from input
        clauses = " AND ".join(f"{column} = :{column}" for column in where) or "1 = 1"
        row = await self.db.fetch_one(f"SELECT COUNT(*) AS n FROM {table} WHERE {clauses}", where)
        return row["n"]


@pytest_asyncio.fixture
async def db():
    """Fresh in-memory database with all tables."""
    database = Database(TEST_DATABASE_URL)
    await database.create_schema()
    yield database
    await database.dispose()


@pytest.fixture
def seed(db):
    """Seeding helper bound to the test database."""
    return Seeder(db)


# =============================================================================
# Application
# =============================================================================

@pytest.fixture
def app(db):
    """Application wired to the test database, with a seeded random source."""
    return create_app(db=db, rng=random.Random(1234))


@pytest_asyncio.fixture
async def client(app):
    """HTTP client for the application (cookies persist between requests)."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
        yield client


@pytest.fixture
def login(client):
    """Log the client in as `username`."""

    async def _login(username: str):
        response = await client.post("/auth/login", data={"username": username})
        assert response.status_code == 303, response.text
        return response

    return _login
