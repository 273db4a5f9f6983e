"""
Agri Assistant API

FastAPI application for an agricultural assistant: leaf disease
classification, soil condition analysis and weather-driven pest risk.

This is the main entry point for the application.

Usage:
    uvicorn app.main:app --reload
    python -m app.main

Environment:
    PORT              Listening port (default 5000)
    OPENWEATHER_KEY   OpenWeatherMap API key
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core.config import get_settings
from app.core.dependencies import get_model_handle
from app.core.errors import ServiceError
from app.core.middleware import RequestSizeLimitMiddleware
from app.api.routes import health_router, leaf_router, pest_router, soil_router
from app.api.routes.health import set_startup_time
from app.models.enums import ModelState

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs on startup:
    - Load the leaf classification model (non-fatal on failure)
    - Check the weather provider key
    """
    logger.info("Starting Agri Assistant API...")

    set_startup_time()

    model = get_model_handle()
    if model.state is ModelState.UNAVAILABLE:
        logger.warning("Leaf classifier unavailable; /predict-leaf will report it")

    if not settings.openweather_key:
        logger.warning("OPENWEATHER_KEY is not set; /pest-risk will fail upstream")

    logger.info(f"🚀 Backend running on port {settings.port}")

    yield

    logger.info("Shutting down Agri Assistant API...")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
## Agri Assistant API

### Endpoints

- `POST /predict-leaf` - Leaf disease classification from a base64 image
- `POST /analyze-soil` - Soil pH and moisture assessment
- `POST /pest-risk` - Pest risk from current weather at a location
- `GET /health` - Health check
- `GET /health/ready` - Readiness with model and weather provider status

Errors are returned as `{"error": "<message>"}`.
    """,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)

# Added before CORS so CORS wraps the size limit
app.add_middleware(
    RequestSizeLimitMiddleware,
    max_bytes=int(settings.max_request_size_mb * 1024 * 1024),
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    """Render service failures as {"error": message}."""
    logger.info(f"{request.method} {request.url.path} -> {exc.status_code} ({exc.kind.value})")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed JSON or wrongly typed fields."""
    logger.warning(f"Invalid request body on {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unhandled exception: {exc}")
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


# Include routers
app.include_router(health_router, prefix=settings.api_prefix)
app.include_router(leaf_router, prefix=settings.api_prefix)
app.include_router(soil_router, prefix=settings.api_prefix)
app.include_router(pest_router, prefix=settings.api_prefix)


@app.get("/", tags=["Root"])
async def root():
    """API information endpoint."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "documentation": "/docs",
        "health_check": f"{settings.api_prefix}/health",
        "endpoints": [
            f"{settings.api_prefix}/predict-leaf",
            f"{settings.api_prefix}/analyze-soil",
            f"{settings.api_prefix}/pest-risk",
        ]
    }


# Entry point for running with Python
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        workers=1 if settings.debug else settings.workers
    )
