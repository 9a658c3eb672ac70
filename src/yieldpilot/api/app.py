"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from yieldpilot import __version__
from yieldpilot.accounts.database import close_db, init_db
from yieldpilot.config import get_settings
from yieldpilot.errors import ApiError
from yieldpilot.web.services.container import ServiceContainer

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    await init_db()
    app.state.services = ServiceContainer(get_settings())
    yield
    # Shutdown
    await app.state.services.close()
    await close_db()


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    """Render ApiError as the JSON error envelope."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected ({exc.status_code}): {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Request validation failures are client errors (400)."""
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    error = ApiError(
        f"Validation error: {', '.join(messages)}",
        status_code=400,
        code="VALIDATION_ERROR",
    )
    return JSONResponse(status_code=400, content=error.to_dict())


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Yieldpilot API",
        description="DeFi assistant backend: deposit building, wallet lookups and chat",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    # Register routes
    from yieldpilot.api.routes import auth, health, users
    from yieldpilot.web.controllers import (
        chat_router,
        contracts_router,
        lending_router,
        wallet_router,
    )

    app.include_router(health.router, tags=["Health"])
    app.include_router(lending_router, prefix="/api")
    app.include_router(wallet_router, prefix="/api")
    app.include_router(contracts_router, prefix="/api")
    app.include_router(chat_router, prefix="/api")
    app.include_router(auth.router, prefix="/api")
    app.include_router(users.router, prefix="/api")

    return app


# Default app instance
app = create_app()
