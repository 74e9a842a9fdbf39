"""
API Module — FastAPI Health Status Service

Public API:
- app: FastAPI application instance
- router, dogs_router: API routes
"""

from .main import app
from .routes import router, dogs_router

__all__ = [
    "app",
    "router",
    "dogs_router",
]
