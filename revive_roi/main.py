"""
Main FastAPI application entry point.
"""

import logging

import uvicorn
from fastapi import FastAPI

from revive_roi import __version__
from revive_roi.config import get_settings
from revive_roi.api import router as api_router

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Return-on-investment projections for renovate-and-lease deals",
    version=__version__,
    debug=settings.debug,
)

# Include API routes
app.include_router(api_router, prefix="/api")


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    return {"status": "healthy", "version": __version__}


def run():
    """Serve the API with uvicorn using the configured host and port."""
    uvicorn.run(
        "revive_roi.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
