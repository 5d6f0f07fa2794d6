"""
PlanPulse API Main Application

Entry point for the FastAPI application.
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_client import make_asgi_app

from planpulse.platform.config import settings
from planpulse.platform.logging import configure_logging, get_logger
from planpulse.api.routers import insights
from planpulse.engine.exceptions import InvalidInputError

# Configure logging on import
configure_logging()
logger = get_logger(__name__)


# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.VERSION,
    description="Risk, prediction and assignment insights for planning data",
    docs_url="/docs",
    redoc_url="/redoc",
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS.split(",") if settings.CORS_ORIGINS else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# ERROR HANDLING
# =============================================================================


@app.exception_handler(InvalidInputError)
async def invalid_input_handler(request: Request, exc: InvalidInputError) -> JSONResponse:
    logger.warning(
        "invalid_engine_input",
        path=request.url.path,
        message=exc.message,
        details=exc.details,
    )
    return JSONResponse(
        status_code=400,
        content={"detail": exc.message, "details": exc.details},
    )


# =============================================================================
# OBSERVABILITY
# =============================================================================

if settings.METRICS_ENABLED:
    app.mount("/metrics", make_asgi_app())


# =============================================================================
# HEALTH ENDPOINTS
# =============================================================================


@app.get("/health/live", tags=["Health"])
async def liveness() -> dict:
    """Liveness probe - is the service running?"""
    return {"status": "alive", "version": settings.VERSION}


# =============================================================================
# API ROUTERS
# =============================================================================

app.include_router(insights.router, prefix="/api/v1/insights", tags=["Insights"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "planpulse.api.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.DEBUG,
    )
