"""FastAPI application entry point.

Configures structured logging, the application context and APScheduler
lifecycle (lifespan), security headers, error rendering, and router
registration.
"""

import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.core.constants import SECURITY_HEADERS
from app.core.context import build_context
from app.core.errors import AppError
from app.core.logging import setup_logging
from app.routers import health, pages, recruiter, submit
from app.scheduler.jobs import shutdown_scheduler, start_scheduler

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(application: FastAPI) -> AsyncIterator[None]:
    """Application lifespan: startup and shutdown hooks.

    Builds the ``AppContext`` (rate limiters, HTTP client), starts the
    bucket sweep, and tears both down on exit.
    """
    setup_logging()
    logger.info("Application starting up")
    context = build_context(settings)
    application.state.context = context
    start_scheduler(context.limiters(), settings.RATE_LIMIT_SWEEP_MINUTES)
    yield
    shutdown_scheduler()
    await context.aclose()
    logger.info("Application shutting down")


app = FastAPI(
    title="Resumrr API",
    description="Resume intake and recruiter dashboard proxy for n8n workflows",
    version="0.1.0",
    lifespan=lifespan,
)


# ---------------------------------------------------------------------------
# Security headers
# ---------------------------------------------------------------------------
@app.middleware("http")
async def security_headers(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    response = await call_next(request)
    for header, value in SECURITY_HEADERS.items():
        response.headers[header] = value
    return response


# ---------------------------------------------------------------------------
# Error rendering
# ---------------------------------------------------------------------------
@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    # Rendered by the outermost middleware, so the headers are set here
    logger.exception(
        "unhandled_error",
        extra={"path": request.url.path, "error_type": type(exc).__name__},
    )
    return JSONResponse(
        status_code=500,
        content={"message": "Internal server error"},
        headers=SECURITY_HEADERS,
    )


# ---------------------------------------------------------------------------
# Router Registration
# ---------------------------------------------------------------------------
app.include_router(health.router, tags=["Health"])
app.include_router(submit.router, prefix="/api", tags=["Intake"])
app.include_router(recruiter.router, prefix="/api/recruiter", tags=["Recruiter"])
app.include_router(pages.router, tags=["Pages"])
