"""Flower catalog lookups against Elasticsearch.

A flower is addressed by either its primary (Latin/English) name or its
Korean alias. Both keys are checked by one store query, so whichever key
matches, the record comes back through the same path. When two records
collide across the key spaces the first hit in index order wins; the
lookup fetches a second hit only to log the collision.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional

from elasticsearch import ApiError, Elasticsearch, NotFoundError, TransportError

from .config import Settings
from .errors import FlowerNotFound, ResolutionFailure
from .models import CATALOG_FIELDS, FlowerRecord

logger = logging.getLogger(__name__)

NAME_FIELDS = ("flowername", "flowername_kr")


def build_lookup_query(name: str) -> Dict[str, Any]:
    return {
        "size": 2,
        "sort": ["_doc"],
        "_source": list(CATALOG_FIELDS),
        "query": {
            "bool": {
                "should": [{"term": {field: name}} for field in NAME_FIELDS],
                "minimum_should_match": 1,
            }
        },
    }


class CatalogStore:
    """Thin wrapper over the catalog index exposing a single-document find."""

    def __init__(self, es: Elasticsearch, index: str) -> None:
        self._es = es
        self._index = index

    async def find_one(self, name: str) -> Optional[Dict[str, Any]]:
        body = build_lookup_query(name)
        logger.debug("catalog lookup index=%s name=%r", self._index, name)
        try:
            response = await asyncio.to_thread(self._es.search, index=self._index, body=body)
        except NotFoundError:
            logger.warning("Catalog index %s does not exist", self._index)
            return None
        except (ApiError, TransportError) as exc:
            logger.exception("Catalog lookup failed for %r", name)
            raise ResolutionFailure() from exc

        hits = response.get("hits", {}).get("hits", [])
        if not hits:
            return None
        if len(hits) > 1:
            logger.debug(
                "name %r matches more than one flower; using %r over %r",
                name,
                hits[0].get("_source", {}).get("flowername"),
                hits[1].get("_source", {}).get("flowername"),
            )
        return hits[0].get("_source", {})


class CatalogResolver:
    """Resolves a flower name to its projected catalog record."""

    def __init__(self, store: CatalogStore) -> None:
        self._store = store

    @classmethod
    def from_settings(cls, es: Elasticsearch, config: Settings) -> "CatalogResolver":
        return cls(CatalogStore(es, config.flower_index))

    async def resolve(self, name: str) -> FlowerRecord:
        source = await self._store.find_one(name)
        if source is None:
            logger.info("Flower %r not found", name)
            raise FlowerNotFound()
        return FlowerRecord(**{field: source.get(field) for field in CATALOG_FIELDS})
