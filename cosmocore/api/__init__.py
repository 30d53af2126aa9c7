"""
PURPOSE: API router initialization and exports for Cosmocore.

This module aggregates the system and webhook routers into a single
api_router that is included in the main FastAPI application. Routes are
mounted at the root: GET /health and POST /webhook.
"""

from fastapi import APIRouter

from cosmocore.api.routes_system import router as system_router
from cosmocore.api.routes_webhook import router as webhook_router

# Create the main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(system_router)
api_router.include_router(webhook_router)

__all__ = ["api_router"]
