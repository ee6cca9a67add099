"""
Fantasy Season Outcome Simulator - FastAPI Application

Main entry point for the web API.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.routes import simulations_router
from .core import CORS_ORIGINS, LOG_LEVEL, setup_logging
from .db import async_session_maker, create_tables, SimulationTaskRepository


setup_logging(LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    try:
        await create_tables()
        async with async_session_maker() as db:
            removed = await SimulationTaskRepository(db).cleanup_old_tasks()
            await db.commit()
        if removed:
            logger.info("Removed %d expired scenario tasks", removed)
    except Exception as e:
        logger.error(f"Failed to prepare task store on startup: {e}")
        # App still starts; baseline runs do not need the database
    yield
    # Shutdown


# Create FastAPI app
app = FastAPI(
    title="Fantasy Season Outcome Simulator",
    description="Monte Carlo simulation of playoff odds, finishing ranks and matchup stakes for fantasy leagues.",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(simulations_router, prefix="/api")


@app.get("/api/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": "1.0.0"}


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": "Fantasy Season Outcome Simulator API",
        "version": "1.0.0",
        "docs": "/api/docs",
        "health": "/api/health"
    }
