"""Paginated aggregation of shopping results for a single search term.

Pages are requested strictly one after another, starting at offset 1 and
advancing by the page size after each non-empty page:

    FETCHING --empty page--> EXHAUSTED
    FETCHING --offset past cap--> CAPPED
    FETCHING --provider error--> FAILED

A short page does not end the loop; only an empty page or the cap does.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Protocol

from .errors import AggregationFailure

logger = logging.getLogger(__name__)

# Naver caps display at 100 and start at 1000.
PAGE_SIZE = 100
MAX_RESULTS = 1000


class PageFetcher(Protocol):
    async def fetch_page(self, query: str, start: int, display: int) -> List[Dict[str, Any]]: ...


class AggregationPhase(str, Enum):
    FETCHING = "fetching"
    EXHAUSTED = "exhausted"
    CAPPED = "capped"
    FAILED = "failed"


@dataclass
class AggregationState:
    page_start: int = 1
    collected: List[Dict[str, Any]] = field(default_factory=list)
    pages_requested: int = 0
    phase: AggregationPhase = AggregationPhase.FETCHING


def advance(state: AggregationState, items: List[Dict[str, Any]], page_size: int, total_cap: int) -> AggregationState:
    """Apply one successfully fetched page to ``state``."""
    if state.phase is not AggregationPhase.FETCHING:
        raise RuntimeError(f"Cannot advance aggregation in phase {state.phase.value}")
    if not items:
        state.phase = AggregationPhase.EXHAUSTED
        return state
    state.collected.extend(items)
    state.page_start += page_size
    if state.page_start > total_cap:
        state.phase = AggregationPhase.CAPPED
    return state


class ResultAggregator:
    """Collects up to ``total_cap`` items in pages of ``page_size``.

    Both bounds are capped at the provider limits; a page size below one
    would never advance the offset.
    """

    def __init__(self, fetcher: PageFetcher, page_size: int = PAGE_SIZE, total_cap: int = MAX_RESULTS) -> None:
        if not 1 <= page_size <= PAGE_SIZE:
            raise ValueError(f"page_size must be between 1 and {PAGE_SIZE}, got {page_size}")
        if not 1 <= total_cap <= MAX_RESULTS:
            raise ValueError(f"total_cap must be between 1 and {MAX_RESULTS}, got {total_cap}")
        self._fetcher = fetcher
        self.page_size = page_size
        self.total_cap = total_cap

    async def aggregate(self, query: str) -> List[Dict[str, Any]]:
        state = AggregationState()

        while state.phase is AggregationPhase.FETCHING:
            state.pages_requested += 1
            try:
                items = await self._fetcher.fetch_page(query, state.page_start, self.page_size)
            except Exception as exc:
                state.phase = AggregationPhase.FAILED
                state.collected = []
                logger.exception(
                    "Shopping page request failed query=%r start=%s after %s pages",
                    query,
                    state.page_start,
                    state.pages_requested - 1,
                )
                raise AggregationFailure() from exc
            advance(state, items, self.page_size, self.total_cap)

        logger.info(
            "Collected %s shopping items for %r (pages=%s, stop=%s)",
            len(state.collected),
            query,
            state.pages_requested,
            state.phase.value,
        )
        return state.collected
