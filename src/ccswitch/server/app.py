"""FastAPI application for the cc-switch dashboard backend."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ccswitch import __version__
from ccswitch.data import database
from ccswitch.server.schemas.common import ErrorResponse
from ccswitch.server.services.base import RecordNotFoundError

logger = logging.getLogger(__name__)


def _print_new_key(key: str) -> None:
    rule = "=" * 70
    print(f"\n{rule}")
    print("🔑 cc-switch created the default user")
    print(rule)
    print(f"\nAPI key: {key}")
    print("\nThis key is shown once. Send it as X-API-Key with every /api request.")
    print(f"{rule}\n")


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Create the schema and a first user on startup; release the engine on shutdown."""
    await database.init_db()

    from ccswitch.server.auth import ensure_default_user

    async with database.AsyncSessionLocal() as session:
        new_key = await ensure_default_user(session)
    if new_key is not None:
        _print_new_key(new_key)

    yield

    await database.close_db()


def jsonable_errors(exc: RequestValidationError) -> list[object]:
    """Validation errors with non-JSON values (such as exceptions in ``ctx``) stringified."""
    return jsonable_encoder(exc.errors(), custom_encoder={Exception: str})


def create_app() -> FastAPI:
    """Build the application with middleware, error handlers and every router."""
    app = FastAPI(
        title="cc-switch",
        description="Configuration profiles for Claude Code, Codex CLI, Gemini CLI and OpenCode",
        version=__version__,
        lifespan=lifespan,
    )

    # the dashboard may be served from any origin
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def on_validation_error(_request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content=ErrorResponse(
                error="Validation Error",
                message="Request validation failed",
                details=jsonable_errors(exc),
            ).body(),
        )

    @app.exception_handler(RecordNotFoundError)
    async def on_not_found(_request: Request, exc: RecordNotFoundError) -> JSONResponse:
        return JSONResponse(
            status_code=404,
            content=ErrorResponse(error="Not Found", message=str(exc)).body(),
        )

    @app.exception_handler(Exception)
    async def on_unhandled_error(request: Request, exc: Exception) -> JSONResponse:
        logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc!r}")
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(error="Internal Server Error", message=str(exc)).body(),
        )

    from ccswitch.server.api import api_router

    app.include_router(api_router)
    return app
