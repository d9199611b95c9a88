"""Main FastAPI server for the WhatsApp relay API."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import ORJSONResponse

from relay.runtime.logging import configure_logging
from relay.handlers.routes import router
from relay.handlers.errors import ApiError, api_error_handler
from relay.runtime.dependencies import build_runtime_deps

logger = logging.getLogger(__name__)

configure_logging()


@asynccontextmanager
async def _lifespan(app: FastAPI):
    runtime_deps = build_runtime_deps()
    app.state.runtime_deps = runtime_deps
    if runtime_deps.settings.session.autostart:
        runtime_deps.lifecycle.start_background()
    logger.info("runtime: ready")
    try:
        yield
    finally:
        deps = getattr(app.state, "runtime_deps", None)
        if deps is not None:
            await deps.shutdown()


app = FastAPI(default_response_class=ORJSONResponse, lifespan=_lifespan)
app.add_exception_handler(ApiError, api_error_handler)
app.include_router(router)


@app.get("/")
async def root() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}
