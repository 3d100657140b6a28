"""Catalog store connection, one client per configured host."""
from __future__ import annotations

import logging
from functools import lru_cache

from elasticsearch import Elasticsearch

from .config import Settings

logger = logging.getLogger(__name__)


@lru_cache(maxsize=4)
def _client_for(es_host: str) -> Elasticsearch:
    logger.info("Connecting to catalog store at %s", es_host)
    return Elasticsearch(es_host)


def get_client(config: Settings) -> Elasticsearch:
    """Return the shared synchronous client for ``config.es_host``.

    Callers wrap blocking calls in ``asyncio.to_thread``.
    """
    return _client_for(config.es_host)
