"""
Main FastAPI application entry point.
"""
import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from pam_abl.core.config import settings
from pam_abl.core.exceptions import ConfigError
from pam_abl.core.logging_config import setup_logging
from pam_abl.api.v1.router import api_router
from pam_abl.middleware.request_logging import RequestLoggingMiddleware

# Setup logging
setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    logger.info(f"Starting up {settings.APP_NAME} ({settings.APP_ENV})...")
    logger.info(f"Configuration files allowed from: {settings.ALLOWED_CONFIG_DIRS}")
    yield
    logger.info(f"Shutting down {settings.APP_NAME}...")


app = FastAPI(
    title="pam_abl Config Validator API",
    description="Validate pam_abl command directives, module arguments and configuration files",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    redirect_slashes=False,
)

# Request logging middleware (must be added before other middleware)
app.add_middleware(RequestLoggingMiddleware)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API router
app.include_router(api_router, prefix="/api/v1")


@app.exception_handler(ConfigError)
async def config_error_handler(request: Request, exc: ConfigError):
    """Configuration errors that escaped an endpoint are client errors."""
    trace_id = getattr(request.state, "trace_id", str(uuid.uuid4()))
    logger.warning(f"[{trace_id}] Configuration error: {type(exc).__name__}: {exc}")
    return JSONResponse(
        status_code=400,
        content={
            "detail": str(exc),
            "trace_id": trace_id,
            "error": type(exc).__name__,
        },
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler for unhandled errors with trace_id."""
    if isinstance(exc, HTTPException):
        raise exc

    trace_id = getattr(request.state, "trace_id", str(uuid.uuid4()))
    logger.error(
        f"[{trace_id}] Unhandled exception: {type(exc).__name__}: {exc}",
        exc_info=True
    )

    return JSONResponse(
        status_code=500,
        content={
            "detail": str(exc) if settings.DEBUG else "Internal Server Error",
            "trace_id": trace_id,
            "error": type(exc).__name__,
        },
    )


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "pam_abl Config Validator API",
        "version": "1.0.0",
        "docs": "/docs",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint for load balancers."""
    return {"status": "ok"}
