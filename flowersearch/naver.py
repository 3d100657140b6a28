"""Naver Shopping search API client."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from .config import Settings

logger = logging.getLogger(__name__)


class NaverShoppingClient:
    """Fetches one page of shopping items from the Naver search API.

    Items are returned verbatim. Transport faults and non-2xx statuses
    surface as ``httpx.HTTPError``; a body that is not a JSON object with an
    ``items`` list raises ``ValueError``.
    """

    def __init__(self, config: Settings, http_client: Optional[httpx.AsyncClient] = None) -> None:
        self.api_url = config.naver_api_url
        self.client_id = config.naver_client_id
        self.client_secret = config.naver_client_secret
        self.sort = config.provider_sort
        self.timeout_seconds = config.http_timeout_seconds
        self._http_client = http_client

    def _headers(self) -> Dict[str, str]:
        return {
            "X-Naver-Client-Id": self.client_id,
            "X-Naver-Client-Secret": self.client_secret,
        }

    async def fetch_page(self, query: str, start: int, display: int) -> List[Dict[str, Any]]:
        params = {"query": query, "display": display, "start": start, "sort": self.sort}
        if self._http_client is not None:
            response = await self._http_client.get(self.api_url, params=params, headers=self._headers())
        else:
            async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
                response = await client.get(self.api_url, params=params, headers=self._headers())
        response.raise_for_status()

        data = response.json()
        if not isinstance(data, dict):
            raise ValueError(f"Unexpected shopping payload type: {type(data).__name__}")
        items = data.get("items") or []
        if not isinstance(items, list):
            raise ValueError(f"Unexpected items type: {type(items).__name__}")
        logger.debug("naver page query=%r start=%s display=%s items=%s", query, start, display, len(items))
        return items
