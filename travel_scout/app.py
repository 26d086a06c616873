from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from .catalog.data_store import get_catalog
from .catalog.models import CatalogIndex
from .llm.config import DEFAULT_LLM_CONFIG
from .llm.groq_client import RecommendationClient
from .search.gateway import ReasoningClient, SearchGateway
from .search.models import SearchResponse

logger = logging.getLogger(__name__)

INVALID_JSON_MESSAGE = "Request body must be valid JSON"


def _json(status_code: int, response: SearchResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=response.model_dump(exclude_none=True))


def create_app(
    catalog: CatalogIndex | None = None,
    client: ReasoningClient | None = None,
) -> FastAPI:
    """
    Build the API. Missing dependencies are resolved at startup, so an unset
    ``GROQ_API_KEY`` stops the process before it serves any request.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        resolved_catalog = catalog if catalog is not None else get_catalog()
        resolved_client = client if client is not None else RecommendationClient(DEFAULT_LLM_CONFIG)
        app.state.catalog = resolved_catalog
        app.state.gateway = SearchGateway(resolved_catalog, resolved_client)
        logger.info("Travel Scout ready with %d catalog items", len(resolved_catalog))
        yield

    app = FastAPI(title="Travel Scout API", version="1.0.0", lifespan=lifespan)

    # ── Public endpoints ─────────────────────────────────────────────────

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/metadata")
    def metadata(request: Request) -> dict:
        index: CatalogIndex = request.app.state.catalog
        bounds = index.price_bounds()
        return {
            "tags": index.sorted_tags(),
            "price": {"min": bounds[0], "max": bounds[1]} if bounds else None,
            "total_items": len(index),
        }

    # ── Search endpoint ──────────────────────────────────────────────────

    @app.post("/api/search")
    async def search(request: Request) -> JSONResponse:
        try:
            payload = await request.json()
        except ValueError:
            return _json(400, SearchResponse(results=[], error=INVALID_JSON_MESSAGE))

        gateway: SearchGateway = request.app.state.gateway
        # The Groq SDK call blocks
        outcome = await run_in_threadpool(gateway.handle, payload)
        return _json(outcome.status_code, outcome.response)

    return app


app = create_app()
