"""FastAPI application exposing flower lookups and Naver Shopping results."""
from __future__ import annotations

import asyncio
import logging
from urllib.parse import quote, urlencode

from elasticsearch import ApiError, TransportError
from fastapi import Depends, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse, RedirectResponse

from .aggregator import ResultAggregator
from .catalog import CatalogResolver
from .config import settings
from .errors import FlowerNotFound, FlowerSearchError, MissingParameter
from .es_client import get_client
from .importer import import_if_empty, reindex_data
from .indexing import ensure_index, index_is_empty
from .models import ErrorResponse, FlowerRecord, ShoppingResponse
from .naver import NaverShoppingClient

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_LEVEL = logging.getLevelName(settings.log_level.upper())

logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT, force=True)
for name in ("uvicorn", "uvicorn.error", "uvicorn.access", "elastic_transport", "httpx"):
    logging.getLogger(name).setLevel(LOG_LEVEL)

logger = logging.getLogger(__name__)
logger.info("Logging configured at %s", settings.log_level.upper())

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, PUT, POST, DELETE",
    "Access-Control-Allow-Headers": "Origin, X-Requested-With, Content-Type, Accept",
}

app = FastAPI(title="Flower Search Service")
# Answers preflight requests; the middleware below covers every other response.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "PUT", "POST", "DELETE"],
    allow_headers=["Origin", "X-Requested-With", "Content-Type", "Accept"],
)


@app.middleware("http")
async def add_cors_headers(request: Request, call_next):
    response = await call_next(request)
    response.headers.update(CORS_HEADERS)
    return response


def get_resolver() -> CatalogResolver:
    return CatalogResolver.from_settings(get_client(settings), settings)


def get_aggregator() -> ResultAggregator:
    return ResultAggregator(NaverShoppingClient(settings))


def _require_term(value: str | None) -> str:
    term = (value or "").strip()
    if not term:
        raise MissingParameter()
    return term


@app.exception_handler(FlowerSearchError)
async def flower_search_error_handler(request: Request, exc: FlowerSearchError) -> JSONResponse:
    if isinstance(exc, (FlowerNotFound, MissingParameter)):
        logger.info("%s %s -> %s %s", request.method, request.url.path, exc.status_code, exc.message)
    else:
        logger.error("%s %s -> %s %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    # Rendered outside the middleware stack, so CORS headers are set here.
    return JSONResponse(status_code=500, content=FlowerSearchError().to_dict(), headers=CORS_HEADERS)


@app.on_event("startup")
async def startup_event() -> None:
    es = get_client(settings)
    try:
        await ensure_index(es, settings)
        if settings.load_on_startup:
            imported = await import_if_empty(es, settings)
            if imported:
                logger.info("Imported %s flowers on startup", imported)
    except (ApiError, TransportError) as exc:
        logger.warning("Catalog store not ready at startup: %s", exc)


@app.get("/health")
async def health() -> dict:
    es = get_client(settings)
    status = await asyncio.to_thread(es.cluster.health)
    empty = await index_is_empty(es, settings)
    return {
        "elasticsearch": status.get("status"),
        "index": settings.flower_index,
        "empty": empty,
    }


@app.get(
    "/flowers",
    response_model=FlowerRecord,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def get_flower(
    flowername: str | None = Query(None, description="Primary or Korean flower name"),
    resolver: CatalogResolver = Depends(get_resolver),
) -> FlowerRecord:
    name = _require_term(flowername)
    return await resolver.resolve(name)


@app.get("/naver-shopping")
async def naver_shopping_redirect(flowername: str | None = Query(None)):
    keyword = (flowername or "").strip()
    if not keyword:
        return PlainTextResponse("Missing flowername", status_code=400)
    redirect_url = f"{settings.naver_shopping_url}?{urlencode({'query': keyword}, quote_via=quote)}"
    return RedirectResponse(redirect_url, status_code=302)


@app.get(
    "/naver-shopping-api",
    response_model=ShoppingResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def naver_shopping_api(
    flowername: str | None = Query(None, description="Search term sent to Naver Shopping"),
    aggregator: ResultAggregator = Depends(get_aggregator),
) -> ShoppingResponse:
    term = _require_term(flowername)
    items = await aggregator.aggregate(term)
    return ShoppingResponse(items=items)


@app.post("/reindex")
async def reindex() -> dict:
    es = get_client(settings)
    count = await reindex_data(es, settings)
    return {"indexed": count}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.port)
