"""Pytest fixtures for catalog console tests.

``FakeCatalogServer`` is an in-memory stand-in for the REST store, served
to the async client through ``httpx.MockTransport``.
"""
import json

import httpx
import pytest

from catalog_console.async_client import AsyncEntityClient
from catalog_console.entities import AUTHORS, BOOKS, CATEGORIES


class FakeCatalogServer:
    """Records every request and answers from in-memory collections."""

    def __init__(self):
        self.collections = {
            "authors": [{"id": 1, "name": "Orwell"}, {"id": 3, "name": "Huxley"}],
            "categories": [{"id": 2, "name": "Fiction"}, {"id": 1, "name": "Essay"}],
            "books": [
                {"id": 5, "title": "1984", "authorName": "Orwell", "categoryName": "Fiction", "isbn": "111"},
            ],
        }
        self.requests = []
        # (method, path) -> httpx.Response or exception, used once
        self.overrides = {}

    def fail(self, method: str, path: str, response):
        self.overrides[(method, path)] = response

    def calls(self, method: str = None):
        return [r for r in self.requests if method is None or r[0] == method]

    def _name_of(self, key: str, entity_id: int) -> str:
        for entry in self.collections[key]:
            if entry["id"] == entity_id:
                return entry["name"]
        return ""

    def _row(self, key: str, entity_id: int, body: dict) -> dict:
        if key != "books":
            return {"id": entity_id, "name": body["name"]}
        return {
            "id": entity_id,
            "title": body["title"],
            "authorName": self._name_of("authors", body["authorId"]),
            "categoryName": self._name_of("categories", body["categoryId"]),
            "isbn": body["isbn"],
        }

    def handler(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content) if request.content else None
        self.requests.append((request.method, request.url.path, body))

        override = self.overrides.pop((request.method, request.url.path), None)
        if isinstance(override, Exception):
            raise override
        if override is not None:
            return override

        parts = request.url.path.strip("/").split("/")
        key = parts[1]
        collection = self.collections[key]

        if request.method == "GET":
            return httpx.Response(200, json=collection)

        if request.method == "POST":
            new_id = max((e["id"] for e in collection), default=0) + 1
            row = self._row(key, new_id, body)
            collection.append(row)
            return httpx.Response(201, json=row)

        entity_id = int(parts[2])
        index = next((i for i, e in enumerate(collection) if e["id"] == entity_id), None)
        if index is None:
            return httpx.Response(404, text="not found")

        if request.method == "PUT":
            collection[index] = self._row(key, entity_id, body)
            return httpx.Response(200, json=collection[index])

        del collection[index]
        return httpx.Response(204)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


BASE_URL = "http://catalog.test"


@pytest.fixture
def server():
    return FakeCatalogServer()


@pytest.fixture
def make_client(server):
    """Factory for async clients wired to the fake server."""

    def _make(entity):
        return AsyncEntityClient(entity, BASE_URL, transport=server.transport())

    return _make


@pytest.fixture
def books_client(make_client):
    return make_client(BOOKS)


@pytest.fixture
def authors_client(make_client):
    return make_client(AUTHORS)


@pytest.fixture
def categories_client(make_client):
    return make_client(CATEGORIES)
