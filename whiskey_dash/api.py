"""FastAPI application exposing the whiskey_dash backend."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Annotated, Optional

from fastapi import Depends, FastAPI, Header, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .config import AppConfig, load_config
from .exceptions import DataSourceError, UnknownSourceError
from .filters import FilterState
from .models import SortField, SortOrder
from .schemas import (
    PRICE_FIELDS,
    BottlePayload,
    ViewContext,
    serialize_bottle,
    serialize_brand,
    serialize_expression,
    serialize_new_bottle,
    serialize_stats,
)
from .services import CollectionService, build_service

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    """Initialise shared services once and reuse them across requests."""

    config = load_config()
    collection_service, repository = build_service(config)

    app.state.config = config
    app.state.collection = collection_service
    logger.info("whiskey_dash ready (default source: %s)", config.default_source)

    yield

    repository.close()


app = FastAPI(lifespan=lifespan, title="whiskey_dash backend", version=__version__)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Error handling ------------------------------------------------------------


@app.exception_handler(DataSourceError)
async def data_source_error_handler(_: Request, exc: DataSourceError) -> JSONResponse:
    logger.error("Data source failure: %s", exc.message)
    return JSONResponse(status_code=502, content={"success": False, "error": exc.message, "source": exc.source})


@app.exception_handler(UnknownSourceError)
async def unknown_source_handler(_: Request, exc: UnknownSourceError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"success": False, "error": exc.message})


# Dependency injection ------------------------------------------------------

def get_config() -> AppConfig:
    config: AppConfig = app.state.config
    return config


def get_collection_service() -> CollectionService:
    service: CollectionService = app.state.collection
    return service


def get_view_context(
    config: Annotated[AppConfig, Depends(get_config)],
    x_collection_password: Annotated[Optional[str], Header()] = None,
) -> ViewContext:
    """Reveal prices when the shared collection password is supplied."""

    password = config.collection_password
    authorized = bool(password) and x_collection_password == password
    return ViewContext(authorized=authorized)


Service = Annotated[CollectionService, Depends(get_collection_service)]
Context = Annotated[ViewContext, Depends(get_view_context)]
Source = Annotated[Optional[str], Query(description="static, sheets or database")]


# Routes --------------------------------------------------------------------


@app.get("/health")
def health_check() -> dict[str, str]:
    """Return a basic heartbeat payload for monitoring purposes."""

    return {"status": "ok", "version": __version__}


@app.get("/bottles")
def list_bottles(
    collection: Service,
    context: Context,
    source: Source = None,
    search: str = "",
    country: str = "",
    type: str = "",
    distillery: str = "",
    sort_by: SortField = SortField.NAME,
    sort_order: SortOrder = SortOrder.ASC,
) -> dict[str, object]:
    if sort_by.value in PRICE_FIELDS and not context.authorized:
        raise HTTPException(status_code=403, detail="Sorting by price requires the collection password")
    filters = FilterState(
        search=search,
        country=country,
        type=type,
        distillery=distillery,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    bottles = collection.bottles(filters, source)
    return {
        "success": True,
        "authorized": context.authorized,
        "count": len(bottles),
        "bottles": [serialize_bottle(bottle, context) for bottle in bottles],
    }


@app.get("/bottles/filters")
def bottle_filter_options(collection: Service, source: Source = None) -> dict[str, object]:
    return collection.filter_options(source)


@app.post("/bottles")
def add_bottle(payload: BottlePayload, collection: Service, source: Source = None) -> dict[str, object]:
    """Append a single bottle to the chosen source."""

    if not payload.name.strip() or not payload.distillery.strip():
        raise HTTPException(status_code=400, detail="Name and distillery are required")
    bottle = payload.to_bottle()
    used_source = collection.add_bottle(bottle, source)
    return serialize_new_bottle(bottle, used_source, collection.brand_of(bottle.name))


@app.get("/stats")
def collection_stats(collection: Service, context: Context, source: Source = None) -> dict[str, object]:
    stats = collection.stats(source)
    return {"success": True, "authorized": context.authorized, "stats": serialize_stats(stats, context)}


@app.get("/brands")
def list_brands(collection: Service, context: Context, source: Source = None) -> dict[str, object]:
    groups = collection.brands(source)
    return {
        "success": True,
        "count": len(groups),
        "brands": [serialize_brand(group, context) for group in groups],
    }


@app.get("/brands/{brand}")
def brand_detail(brand: str, collection: Service, context: Context, source: Source = None) -> dict[str, object]:
    detail = collection.brand_detail(brand, source)
    if detail is None:
        raise HTTPException(status_code=404, detail=f"No bottles found for brand '{brand}'")
    payload = serialize_brand(detail.group, context)
    payload["expression_groups"] = [serialize_expression(group, context) for group in detail.expressions]
    return {"success": True, "brand": payload}


@app.get("/expressions")
def list_expressions(collection: Service, context: Context, source: Source = None) -> dict[str, object]:
    groups = collection.expressions(source)
    return {
        "success": True,
        "count": len(groups),
        "expressions": [serialize_expression(group, context) for group in groups],
    }


@app.post("/sync/{source}")
def sync_dataset(source: str, collection: Service) -> dict[str, object]:
    """Refresh the static dataset from Google Sheets or the database."""

    if source == "sheets":
        written = collection.sync_from_sheets()
    elif source == "database":
        written = collection.sync_from_database()
    else:
        raise HTTPException(status_code=400, detail="Sync source must be 'sheets' or 'database'")
    return {"success": True, "source": source, "bottles": written}
