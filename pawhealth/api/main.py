"""
FastAPI Application — Pet Health Status API

CORS: Configured via environment variables.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pawhealth.config import settings
from pawhealth.database import store
from .routes import router, dogs_router


# Configure logging
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    logger.info(f"🚀 Starting {settings.PROJECT_NAME}")
    logger.info(f"📍 Running in {settings.ENVIRONMENT} mode")
    if settings.SEED_DEMO_DATA:
        from pawhealth.demo import seed_demo_data
        seed_demo_data(store)
    yield
    # Shutdown
    logger.info(f"👋 Shutting down {settings.PROJECT_NAME}")


# Application metadata
app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Dog health status scoring API",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["Content-Type", "Authorization", "X-User-Id"],
)


# Include API routes
app.include_router(router, tags=["Health"])
app.include_router(dogs_router)


@app.get("/", include_in_schema=False)
async def root():
    """Root endpoint, points at docs."""
    return {
        "message": f"{settings.PROJECT_NAME} API",
        "docs": "/docs",
        "health": "/health"
    }


@app.get("/ping", tags=["Health"])
async def ping():
    """Lightweight heartbeat. No store access."""
    return {"status": "ok"}
