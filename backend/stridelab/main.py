"""FastAPI application entry point for the StrideLab API."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from stridelab import __version__
from stridelab.config import get_settings
from stridelab.database import create_tables
from stridelab.exceptions import APIException, api_exception_handler
from stridelab.logging_config import setup_logging
from stridelab.routers import athletes, stats, training_load, workouts

settings = get_settings()

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup: Create database tables
    create_tables()
    logger.info(f"StrideLab API {__version__} started ({settings.ENVIRONMENT})")
    yield
    # Shutdown: Cleanup if needed


app = FastAPI(
    title="StrideLab API",
    description="Backend API for the StrideLab training dashboard - workouts, TRIMP scoring and training load tracking",
    version=__version__,
    lifespan=lifespan,
)

app.add_exception_handler(APIException, api_exception_handler)

# Configure CORS - allow multiple origins for development and production
cors_origins = [
    settings.FRONTEND_URL,
    "http://localhost:3000",
    "http://localhost:5173",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(athletes.router, prefix="/api/athletes", tags=["Athletes"])
app.include_router(
    workouts.router, prefix="/api/athletes/{athlete_id}/workouts", tags=["Workouts"]
)
app.include_router(
    training_load.router,
    prefix="/api/athletes/{athlete_id}/training-load",
    tags=["Training Load"],
)
app.include_router(stats.router, prefix="/api/athletes/{athlete_id}/stats", tags=["Statistics"])
app.include_router(training_load.compute_router, prefix="/api/training-load", tags=["Training Load"])


@app.get("/", tags=["Health"])
async def root():
    """Root endpoint - API information."""
    return {
        "name": "StrideLab API",
        "version": __version__,
        "status": "running",
    }


@app.get("/health", tags=["Health"])
@app.get("/api/health", tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
