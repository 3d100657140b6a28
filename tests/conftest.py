"""Shared fixtures for the flower search tests."""

import json

import pytest

from flowersearch.config import Settings


class FakeIndices:
    def __init__(self, es):
        self._es = es

    def exists(self, index):
        self._es.calls.append(("exists", index))
        if self._es.error is not None:
            raise self._es.error
        return self._es.index_exists

    def create(self, index, body):
        self._es.calls.append(("create", index))
        if self._es.create_error is not None:
            raise self._es.create_error
        self._es.index_exists = True
        self._es.created_body = body

    def delete(self, index):
        self._es.calls.append(("delete", index))
        if not self._es.index_exists:
            raise self._es.not_found
        self._es.index_exists = False


class FakeCluster:
    def __init__(self, status):
        self._status = status

    def health(self):
        return {"status": self._status}


class FakeCatalogES:
    """Records index maintenance calls made through the synchronous client API."""

    def __init__(self, index_exists=False, count=0, error=None, create_error=None, not_found=None, status="green"):
        self.index_exists = index_exists
        self.doc_count = count
        self.error = error
        self.create_error = create_error
        self.not_found = not_found
        self.created_body = None
        self.calls = []
        self.indices = FakeIndices(self)
        self.cluster = FakeCluster(status)

    def count(self, index):
        self.calls.append(("count", index))
        if not self.index_exists and self.not_found is not None:
            raise self.not_found
        return {"count": self.doc_count}


@pytest.fixture
def test_settings():
    """Settings with dummy provider credentials."""
    return Settings(
        flower_index="flowers-test",
        naver_client_id="test-id",
        naver_client_secret="test-secret",
        naver_api_url="https://provider.test/v1/search/shop.json",
    )


@pytest.fixture
def fake_es():
    """Factory for the in-memory catalog client."""
    return FakeCatalogES


@pytest.fixture
def catalog_files(tmp_path):
    """Mapping and seed files in a temporary directory."""
    mapping = tmp_path / "flower-mapping.json"
    mapping.write_text(json.dumps({"mappings": {"properties": {"flowername": {"type": "keyword"}}}}), encoding="utf-8")
    seed = tmp_path / "flowers.json"
    seed.write_text(
        json.dumps(
            [
                {"flowername": "Rose", "flowername_kr": "장미"},
                {"flowername": "Sunflower", "flowername_kr": "해바라기"},
            ]
        ),
        encoding="utf-8",
    )
    return Settings(flower_index="flowers-test", mapping_path=str(mapping), flowers_path=str(seed))
