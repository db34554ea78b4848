"""
Main FastAPI application for the gridstats dashboard.

This module creates the FastAPI application that serves the record store to
the dashboard. FastAPI is a modern web framework for building APIs with
Python; it validates request data with Pydantic models and generates
interactive documentation at /docs.

The API provides:
- The table-dispatch endpoint at /api (games, players, per-game lines,
  seeding and diagnostics, selected with ?table=)
- The same endpoint at /backend/api.php, the path older dashboard builds call
- Root and health endpoints for monitoring

Tables are created on startup, so a fresh checkout can serve requests and
be seeded with GET /api?table=init without a separate setup step.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..config import settings
from ..database.init_db import create_database
from .routers import tables

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create missing tables before the first request is served."""
    create_database()
    logger.info(f"API ready on {settings.api_host}:{settings.api_port}")
    yield


app = FastAPI(
    title="gridstats API",
    description="Game and player statistics for the team dashboard",
    version="0.1.0",
    lifespan=lifespan,
)

# The dashboard is served from a different origin than the API
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
async def root():
    """
    Root endpoint - basic API information.

    Returns:
        dict: Service name, version and where the documentation lives
    """
    return {
        "message": "gridstats API",
        "version": "0.1.0",
        "docs": f"http://{settings.api_host}:{settings.api_port}/docs",
    }


@app.get("/health")
async def health_check():
    """
    Health check endpoint for load balancers and monitoring.

    This only says the process is up. For database connectivity and table
    status use GET /api?table=test instead.
    """
    return {
        "status": "healthy",
        "service": "gridstats",
        "roster_mode": settings.roster_mode,
        "strict_status_codes": settings.strict_status_codes,
    }


# Same handlers under both paths
app.include_router(tables.router, prefix="/api", tags=["tables"])
app.include_router(tables.router, prefix="/backend/api.php", tags=["tables"])
