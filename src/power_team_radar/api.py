from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from dataclasses import asdict
from typing import Any, Dict

from fastapi import Body, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import AppConfig, config_path, load_config
from .fetcher import build_client
from .models import SearchRequest
from .notify import NotifyRequest, notify
from .pipeline import search_opportunities
from .schemas import (
    ErrorResponse,
    NotifyRequestBody,
    NotifyResponse,
    SearchRequestBody,
    SearchResponse,
    SubscribeResponse,
)
from .sources import SourceSpec
from .subscriptions import SubscriptionStore, build_store

logger = logging.getLogger(__name__)

ERROR_RESPONSES: Dict[int | str, Dict[str, Any]] = {
    405: {"model": ErrorResponse, "description": "Method not allowed"},
    422: {"model": ErrorResponse, "description": "Invalid request body"},
    500: {"model": ErrorResponse, "description": "Unexpected server error"},
}


def create_app(
    config: AppConfig | None = None,
    store: SubscriptionStore | None = None,
    sources: list[SourceSpec] | None = None,
) -> FastAPI:
    if config is None:
        config = load_config(config_path(None))
    logging.basicConfig(level=config.log_level)
    if store is None:
        store = build_store(config.subscriptions_path)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting power-team-radar")
        app.state.http_client = build_client(config)
        try:
            yield
        finally:
            await app.state.http_client.aclose()
            app.state.http_client = None
            logger.info("Stopped power-team-radar")

    app = FastAPI(
        title="Power Team Radar",
        description="Health and wellness opportunity radar for Malaysian referral chapters",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.store = store
    app.state.sources = sources
    app.state.http_client = None
    _register_error_handlers(app)

    @app.get("/health")
    async def health_check():
        return {"status": "ok"}

    @app.post("/opportunities/search", response_model=SearchResponse, responses=ERROR_RESPONSES)
    async def search(body: SearchRequestBody, request: Request):
        result = await search_opportunities(
            SearchRequest(
                industries=body.industries,
                locations=body.locations,
                min_budget_rm=body.min_budget_rm,
                time_range_days=body.time_range_days,
                limit=body.limit,
                language=body.language,
            ),
            config,
            client=request.app.state.http_client,
            sources=request.app.state.sources,
        )
        return {"items": [item.to_dict() for item in result.items]}

    @app.post("/opportunities/subscribe", response_model=SubscribeResponse, responses=ERROR_RESPONSES)
    def subscribe(payload: Dict[str, Any] = Body(default={})):
        subscription = store.add(payload)
        logger.info("Stored subscription %s", subscription.id)
        return {"status": "ok", "subscription_id": subscription.id}

    @app.post("/notify/whatsapp", response_model=NotifyResponse, responses=ERROR_RESPONSES)
    async def notify_whatsapp(body: NotifyRequestBody):
        result = notify(
            NotifyRequest(items=body.items, recipient=body.recipient, template=body.template),
            config,
        )
        return asdict(result)

    return app


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        message = "Method not allowed" if exc.status_code == 405 else str(exc.detail)
        return JSONResponse(status_code=exc.status_code, content={"error": message}, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg')}"
            for error in exc.errors()
        )
        return JSONResponse(status_code=422, content={"error": f"Invalid request: {problems}"})

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s", request.url.path)
        return JSONResponse(status_code=500, content={"error": str(exc) or type(exc).__name__})
