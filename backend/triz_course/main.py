"""FastAPI application entry point.

This module wires together the API routers, configures middleware and
startup tasks, and exposes the ASGI application object used by the
server.  The progress store and the GigaChat proxy are built once at
startup and kept on ``app.state``; routes reach them through dependencies
that tests can override.
"""

import os
import logging
import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.openapi.docs import get_swagger_ui_html
from fastapi.openapi.utils import get_openapi
from triz_course.routes import modules, progress, chat, trainer
from triz_course.catalog import default_catalog
from triz_course.database import create_db_and_tables, engine
from triz_course.errors import (
    ConfigurationError,
    UpstreamAuthError,
    UpstreamError,
    ValidationError,
)
from triz_course.gigachat import CompletionProxy, TokenCache, make_client
from triz_course.progress import ProgressStore
from triz_course.storage import SQLStorage

# Basic logging configuration.  The log level can be controlled with an
# environment variable so deployments can adjust verbosity without code
# changes.
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(level=getattr(logging, LOG_LEVEL))
logger = logging.getLogger(__name__)

app = FastAPI(title="TRIZ Course", docs_url=None)


def custom_openapi():
    """Generate an OpenAPI schema that is aware of our `/api` proxy prefix."""

    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description=app.description,
        routes=app.routes,
    )
    # The reverse proxy serves the API under `/api`; tell Swagger about it.
    openapi_schema["servers"] = [{"url": "/api"}]
    app.openapi_schema = openapi_schema
    return app.openapi_schema


app.openapi = custom_openapi

# CORS setup
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def on_startup():
    """Create tables, load saved progress and open the upstream client."""

    create_db_and_tables()
    app.state.progress_store = ProgressStore(SQLStorage(engine), default_catalog)
    client = make_client()
    app.state.http_client = client
    app.state.completion_proxy = CompletionProxy(client, TokenCache(client))
    logger.info(
        "Loaded progress for %s modules", len(app.state.progress_store.progress)
    )


@app.on_event("shutdown")
async def on_shutdown():
    client = getattr(app.state, "http_client", None)
    if client is not None:
        await client.aclose()


app.include_router(modules.router)
app.include_router(progress.router)
app.include_router(chat.router)
app.include_router(trainer.router)


@app.get("/docs", include_in_schema=False)
async def custom_swagger_ui_html():
    """Serve the interactive docs with the correct API prefix."""

    # The API is served behind a `/api` prefix by the reverse proxy, so the
    # schema lives at `/api/openapi.json` from the browser's point of view.
    return get_swagger_ui_html(openapi_url="/api/openapi.json", title="API Docs")


@app.get("/")
async def read_root():
    return {"message": f"Welcome to {app.title} API"}


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    logger.warning("Rejected request to %s: %s", request.url.path, exc)
    return JSONResponse(status_code=400, content={"error": str(exc)})


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
    logger.error("%s", exc)
    return JSONResponse(status_code=500, content={"error": str(exc)})


@app.exception_handler(UpstreamAuthError)
async def upstream_auth_error_handler(request: Request, exc: UpstreamAuthError):
    return JSONResponse(
        status_code=502,
        content={
            "error": f"GigaChat auth error {exc.status_code}",
            "details": exc.body,
        },
    )


@app.exception_handler(UpstreamError)
async def upstream_error_handler(request: Request, exc: UpstreamError):
    return JSONResponse(
        status_code=502,
        content={
            "error": f"GigaChat API error {exc.status_code}",
            "details": exc.body,
        },
    )


@app.exception_handler(httpx.HTTPError)
async def transport_error_handler(request: Request, exc: httpx.HTTPError):
    logger.warning("GigaChat request failed: %s", exc)
    return JSONResponse(status_code=500, content={"error": str(exc) or type(exc).__name__})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Catch-all exception handler that logs the stack trace once."""
    logger.exception("Unhandled error during request %s", request.url.path)
    return JSONResponse(
        status_code=500,
        content={
            "code": "internal_server_error",
            "message": "An unexpected error occurred",
        },
    )
