"""
RAN Link Budget Planner API - Main Application

Sets up the FastAPI application with middleware, routes and error handlers
around the link budget engine.
"""
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api.v1.api import api_router
from .core.config import settings
from .core.logging import log_request, setup_logging
from .exceptions import ConfigurationError, SuggestionServiceError

logger = logging.getLogger(__name__)
setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown events"""
    logger.info(f"Starting {settings.PROJECT_NAME} v{settings.VERSION} in {settings.ENVIRONMENT} mode")
    if not settings.SUGGESTIONS_API_KEY:
        logger.warning("SUGGESTIONS_API_KEY not set; AI suggestions are disabled")
    yield
    logger.info("Shutting down application...")


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="""
    Link budget API for 5G NR and LTE coverage planning

    ## Overview
    - Thermal noise floor from resource blocks / numerology or LTE channel bandwidth
    - 3GPP TR 38.901 UMa/UMi/RMa NLOS and Okumura-Hata / COST 231 Hata path loss
    - Uplink and downlink link budget with margins and a pass/fail verdict
    - Vendor equipment presets
    - AI-generated optimisation suggestions
    """,
    version=settings.VERSION,
    lifespan=lifespan,
    docs_url="/api/docs" if settings.DEBUG else None,
    redoc_url="/api/redoc" if settings.DEBUG else None,
    openapi_url="/api/openapi.json" if settings.DEBUG else None,
    openapi_tags=[
        {"name": "nr", "description": "5G NR link budget"},
        {"name": "lte", "description": "LTE link budget"},
        {"name": "presets", "description": "Vendor presets and LTE bands"},
        {"name": "suggestions", "description": "AI optimisation suggestions"},
    ],
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-Requested-With", "X-Request-ID"],
    expose_headers=["X-Request-ID"],
)


@app.middleware("http")
async def request_logging_middleware(request: Request, call_next):
    request.state.request_id = request.headers.get("X-Request-ID")
    log_request(request)
    try:
        response = await call_next(request)
    except Exception as e:
        log_request(request, error=e)
        raise
    request_id = log_request(request, response=response)
    response.headers["X-Request-ID"] = request_id
    return response


app.include_router(api_router, prefix=settings.API_V1_STR)


@app.get("/", include_in_schema=False)
async def root():
    return {
        "name": settings.PROJECT_NAME,
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT,
    }


@app.get("/health", include_in_schema=False)
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT,
        "time_utc": datetime.now(timezone.utc).isoformat(),
        "services": {
            "suggestions": "ok" if settings.SUGGESTIONS_API_KEY else "disabled",
        },
    }


@app.exception_handler(ConfigurationError)
async def configuration_exception_handler(request: Request, exc: ConfigurationError):
    logger.warning(f"Configuration error: {exc}")
    return JSONResponse(
        status_code=422,
        content={"detail": str(exc)},
    )


@app.exception_handler(SuggestionServiceError)
async def suggestion_exception_handler(request: Request, exc: SuggestionServiceError):
    logger.warning(f"Suggestion service error: {exc}")
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"detail": str(exc)},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler that returns a JSON response for all unhandled exceptions."""
    logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)

    # Don't expose internal errors in production
    detail = str(exc) if settings.DEBUG else "Internal server error"

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": detail},
    )


def run() -> None:
    uvicorn.run(
        "ranlink.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
