"""Shared fixtures: registers on an in-memory store and on a mocked Elasticsearch client."""

from unittest.mock import MagicMock

import pytest

from unique_key import ElasticsearchStore, MemoryStore, UniqueKey


def es_error(cls, status: int, message: str = "error"):
    """Build an elasticsearch ApiError subclass without a live transport."""
    meta = MagicMock()
    meta.status = status
    return cls(message, meta, {"status": status})


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def uniq(memory_store) -> UniqueKey:
    return UniqueKey(memory_store).bootstrap()


@pytest.fixture
def es_client() -> MagicMock:
    client = MagicMock()
    client.indices.exists.return_value = False
    client.exists.return_value = False
    client.delete.return_value = {"result": "deleted"}
    client.delete_by_query.return_value = {"deleted": 0}
    client.cluster.health.return_value = {"status": "green", "timed_out": False}
    return client


@pytest.fixture
def es_store(es_client) -> ElasticsearchStore:
    return ElasticsearchStore(es_client)


@pytest.fixture
def make_es_error():
    return es_error
