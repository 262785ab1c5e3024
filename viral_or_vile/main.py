"""
VIRAL OR VILE - FastAPI Application Entry Point

Initializes the FastAPI application with middleware, routes, error
handlers and lifecycle hooks. Run with:

    python -m viral_or_vile.main
    uvicorn viral_or_vile.main:app
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from viral_or_vile import __version__
from viral_or_vile.api.v1 import analyze, health
from viral_or_vile.core.config import settings
from viral_or_vile.core.exceptions import ImageInputError, ViralOrVileError
from viral_or_vile.core.logging_config import get_logger, setup_logging
from viral_or_vile.middleware.logging import LoggingMiddleware
from viral_or_vile.middleware.request_id import RequestIDMiddleware


logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Startup:
        - Set up logging
    """
    setup_logging(level=settings.log_level, json_format=settings.log_json)
    logger.info(
        "Service starting",
        extra={
            "version": __version__,
            "model": settings.vision_model,
            "ollama_host": settings.ollama_host,
        }
    )

    yield

    logger.info("Service stopped")


app = FastAPI(
    title=settings.project_name,
    version=__version__,
    description="Upload an image, get a viral potential report from a local multimodal model",
    openapi_url=f"{settings.api_prefix}/openapi.json",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)


# Middleware is executed in reverse order of registration
# (last registered = first executed)

# Logging middleware (runs after RequestID to access request_id)
app.add_middleware(LoggingMiddleware)

# Request ID middleware (first to run - sets correlation ID)
app.add_middleware(RequestIDMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
)


@app.exception_handler(ViralOrVileError)
async def service_error_handler(request: Request, exc: ViralOrVileError) -> JSONResponse:
    """Render service errors as {"error": message} with their status code."""
    extra = {
        "request_id": getattr(request.state, "request_id", None),
        "path": request.url.path,
        "status_code": exc.status_code,
        "error_type": type(exc).__name__,
    }
    if isinstance(exc, ImageInputError):
        logger.warning(f"Rejected upload: {exc.message}", extra=extra)
    else:
        logger.error(f"Error analyzing image: {exc.message}", extra=extra)

    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed form data is an input error, same shape as the rest."""
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    logger.warning(
        f"Invalid request: {message}",
        extra={
            "request_id": getattr(request.state, "request_id", None),
            "path": request.url.path,
            "status_code": 400,
        }
    )
    return JSONResponse(status_code=400, content={"error": message})


app.include_router(health.router, prefix=settings.api_prefix, tags=["health"])
app.include_router(analyze.router, prefix=settings.api_prefix, tags=["analyze"])


@app.get("/")
async def root():
    """
    Root endpoint.

    Returns basic API information.
    """
    return {
        "message": settings.project_name,
        "version": __version__,
        "analyze": f"{settings.api_prefix}/analyze",
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
