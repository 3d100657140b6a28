"""Application configuration and constants."""
from __future__ import annotations

import os
from dataclasses import dataclass


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name)
    return value if value is not None else default


@dataclass(frozen=True)
class Settings:
    """Simple settings container with environment variable overrides."""

    es_host: str = _get_env("ES_HOST", "http://localhost:9200")
    flower_index: str = _get_env("FLOWER_INDEX", "flowers")
    mapping_path: str = _get_env("MAPPING_PATH", "flower-mapping.json")
    flowers_path: str = _get_env("FLOWERS_PATH", "flowers.json")
    load_on_startup: bool = _get_env("LOAD_ON_STARTUP", "false").lower() in {"1", "true", "yes"}
    naver_client_id: str = _get_env("CLIENT_ID", "")
    naver_client_secret: str = _get_env("CLIENT_SECRET", "")
    naver_api_url: str = _get_env("NAVER_API_URL", "https://openapi.naver.com/v1/search/shop.json")
    naver_shopping_url: str = _get_env("NAVER_SHOPPING_URL", "https://search.shopping.naver.com/search/all")
    provider_sort: str = _get_env("PROVIDER_SORT", "sim")
    http_timeout_seconds: float = float(_get_env("HTTP_TIMEOUT_SECONDS", "10.0"))
    port: int = int(_get_env("PORT", "5000"))
    log_level: str = _get_env("LOG_LEVEL", "INFO")


settings = Settings()
