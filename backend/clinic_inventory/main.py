"""FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from clinic_inventory.api.v1 import health, medicines, orders, sequences
from clinic_inventory.config import settings
from clinic_inventory.db import dispose_engine
from clinic_inventory.logging import setup_logging

# Configure logging before anything else
setup_logging()

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler for startup/shutdown events."""
    logger.info("Starting Clinic Inventory API", debug=settings.debug)

    yield

    logger.info("Shutting down Clinic Inventory API")
    await dispose_engine()
    logger.info("Database connections disposed")


app = FastAPI(
    title="Clinic Inventory API",
    description="Medicine inventory and supplier orders with sequential business IDs",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.backend_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routes
app.include_router(health.router, prefix="/api/v1", tags=["health"])
app.include_router(medicines.router, prefix="/api/v1")
app.include_router(orders.router, prefix="/api/v1")
app.include_router(sequences.router, prefix="/api/v1")
