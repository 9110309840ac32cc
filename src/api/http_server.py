"""FastAPI HTTP server setup."""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import logging

from database import db_manager
from stations import StationMutationsDisabled, station_mutations_enabled

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle."""
    logger.info("Starting ClawControl server...")

    db_manager.initialize()

    if not station_mutations_enabled():
        logger.info("Station mutations are locked (read-only canonical stations)")

    logger.info("ClawControl server started successfully")

    yield

    logger.info("Shutting down ClawControl server...")
    db_manager.close()
    logger.info("ClawControl server shut down")


app = FastAPI(
    title="ClawControl",
    description="Station catalog and cron helpers for the ClawControl dashboard",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StationMutationsDisabled)
async def station_mutations_disabled_handler(request: Request, exc: StationMutationsDisabled):
    return JSONResponse(status_code=403, content=exc.to_dict())


from .endpoints import router
from .station_endpoints import router as station_router

app.include_router(router, prefix="/api/v1")
app.include_router(station_router, prefix="/api/v1")


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "ClawControl",
        "version": "1.0.0",
        "status": "running"
    }


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "database": db_manager.engine is not None
    }
