"""FastAPI application for the LLMO Checker API."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .... import __version__
from ....common.exception_handler import (
    format_exception_json,
    get_http_status_code,
    log_exception,
)
from ....config import settings, setup_logging
from ....core.domain.exceptions import LLMOError
from .routers import diagnose, health, history

logger = logging.getLogger(__name__)

# Shows full stack traces in error responses
DEBUG_MODE = settings.debug


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging on startup."""
    setup_logging(settings.log_level, settings.log_file, settings.log_json)
    settings.ensure_directories()
    logger.info("LLMO Checker API starting up...")
    logger.info("API docs available at /docs")
    logger.info("Debug mode: %s", "ENABLED" if DEBUG_MODE else "DISABLED")
    yield
    logger.info("LLMO Checker API shutting down...")


app = FastAPI(
    title="LLMO Checker API",
    description=(
        "Diagnoses how likely a web page is to be retrieved and cited by "
        "AI search (RAG) for a target question."
    ),
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",  # Local dev
        "http://localhost:5173",  # Vite dev server
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(diagnose.router)
app.include_router(history.router)


# =============================================================================
# Global Exception Handlers
# =============================================================================


@app.exception_handler(LLMOError)
async def llmo_error_handler(request: Request, exc: LLMOError) -> JSONResponse:
    """Handle all LLMOError exceptions with structured JSON response."""
    log_exception(exc, extra_context={"path": str(request.url.path), "method": request.method})

    return JSONResponse(
        status_code=get_http_status_code(exc),
        content=exc.to_dict(include_trace=DEBUG_MODE),
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all unhandled exceptions with structured JSON response."""
    log_exception(exc, extra_context={"path": str(request.url.path), "method": request.method})

    return JSONResponse(
        status_code=get_http_status_code(exc),
        content=format_exception_json(exc, include_trace=DEBUG_MODE),
    )


__all__ = ["app"]
