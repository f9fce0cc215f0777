"""Pytest configuration and fixtures."""
from types import SimpleNamespace

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from pymongo.errors import DuplicateKeyError

from app.main import app
from app.database import get_database


class InMemoryCollection:
    """Just enough of a motor collection for the key/value store."""

    def __init__(self):
        self.docs = {}

    @staticmethod
    def _matches(doc: dict, query: dict) -> bool:
        return all(doc.get(field) == value for field, value in query.items())

    async def find_one(self, query: dict):
        for doc in self.docs.values():
            if self._matches(doc, query):
                return dict(doc)
        return None

    async def insert_one(self, doc: dict):
        if doc["_id"] in self.docs:
            raise DuplicateKeyError("duplicate key")
        self.docs[doc["_id"]] = dict(doc)
        return SimpleNamespace(inserted_id=doc["_id"])

    async def update_one(self, query: dict, update: dict, upsert: bool = False):
        doc = await self.find_one(query)
        matched = 1 if doc else 0
        if doc is None:
            if not upsert:
                return SimpleNamespace(matched_count=0, modified_count=0)
            doc = {"_id": query["_id"]}

        doc.update(update.get("$set", {}))
        for field, amount in update.get("$inc", {}).items():
            doc[field] = doc.get(field, 0) + amount
        self.docs[doc["_id"]] = doc
        return SimpleNamespace(matched_count=matched, modified_count=1)


class InMemoryDatabase(dict):
    """Database double handing out in-memory collections by name."""

    def __getitem__(self, name):
        if name not in self:
            super().__setitem__(name, InMemoryCollection())
        return super().__getitem__(name)


@pytest.fixture
def memory_db():
    """Empty in-memory database."""
    return InMemoryDatabase()


@pytest_asyncio.fixture
async def app_client(memory_db):
    """
    Create a test client backed by an in-memory database.

    This fixture:
    - Overrides the database dependency
    - Yields an async HTTP client for testing
    - Removes the override afterwards
    """
    app.dependency_overrides[get_database] = lambda: memory_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as client:
        yield client

    app.dependency_overrides.clear()
