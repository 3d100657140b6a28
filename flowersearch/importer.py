"""Seeds the flower catalog index from a JSON file maintained alongside it."""
from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Iterable

from elasticsearch import Elasticsearch, helpers

from .config import Settings
from .models import CATALOG_FIELDS

logger = logging.getLogger(__name__)


def _load_flowers(path: Path) -> list[dict]:
    if not path.exists():
        logger.warning("Flowers file %s is missing", path)
        return []
    with path.open("r", encoding="utf-8") as fh:
        return json.load(fh)


def _prepare_flower(raw: dict) -> dict | None:
    flower = {field: raw[field] for field in CATALOG_FIELDS if raw.get(field) is not None}
    if not flower.get("flowername"):
        logger.warning("Skipping catalog entry without flowername: %r", raw)
        return None
    return flower


def _iter_actions(index: str, flowers: Iterable[dict]) -> Iterable[dict]:
    for flower in flowers:
        yield {
            "_index": index,
            "_id": flower["flowername"],
            "_source": flower,
        }


async def import_flowers(es: Elasticsearch, config: Settings) -> int:
    raw_flowers = _load_flowers(Path(config.flowers_path))
    flowers = [flower for flower in map(_prepare_flower, raw_flowers) if flower]
    if not flowers:
        return 0
    actions = list(_iter_actions(config.flower_index, flowers))
    await asyncio.to_thread(helpers.bulk, es, actions, refresh=True)
    logger.info("Indexed %s flowers into %s", len(actions), config.flower_index)
    return len(actions)


async def import_if_empty(es: Elasticsearch, config: Settings) -> int:
    from .indexing import index_is_empty

    if not await index_is_empty(es, config):
        return 0
    return await import_flowers(es, config)


async def reindex_data(es: Elasticsearch, config: Settings) -> int:
    from .indexing import drop_index, ensure_index

    await drop_index(es, config)
    await ensure_index(es, config)
    return await import_flowers(es, config)
