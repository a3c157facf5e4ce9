"""FastAPI application: routers, error rendering and startup tasks."""

import asyncio
import contextlib
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from bluemoon.api.routes import households, payments, search, statistics, utilities
from bluemoon.config import settings
from bluemoon.errors import AppError, StoreUnavailableError, error_response
from bluemoon.services import AsyncSessionLocal, init_models
from bluemoon.services.overdue_sweep import run_periodic_sweeps

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle (startup and shutdown)."""
    await init_models()
    logger.info("Database tables initialized")

    sweep_task: asyncio.Task | None = None
    if settings.overdue_sweep_interval_seconds > 0:
        sweep_task = asyncio.create_task(
            run_periodic_sweeps(AsyncSessionLocal, settings.overdue_sweep_interval_seconds)
        )

    yield

    if sweep_task is not None:
        sweep_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await sweep_task
    logger.info("Application shutting down")


app = FastAPI(
    title=settings.api_title,
    description="Apartment back office: billing lifecycle, balances and search",
    version=settings.api_version,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Render service errors as {"error": {"code", "message"}}."""
    if exc.http_status >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.http_status, content=error_response(exc))


@app.exception_handler(SQLAlchemyError)
async def store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Render database failures that escaped a service as store-unavailable (503)."""
    logger.error("%s %s failed: %s", request.method, request.url.path, exc, exc_info=exc)
    error = StoreUnavailableError()
    return JSONResponse(status_code=error.http_status, content=error_response(error))


app.include_router(households.router)
app.include_router(payments.router)
app.include_router(utilities.router)
app.include_router(search.router)
app.include_router(statistics.router)


@app.get("/health")
async def health_check() -> dict:
    """Health check endpoint for monitoring."""
    return {"status": "ok"}


__all__ = ["app", "lifespan"]
