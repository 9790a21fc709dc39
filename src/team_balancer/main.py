"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from team_balancer.config import settings
from team_balancer.api.routes.roster import router as roster_router
from team_balancer.api.routes.teams import router as teams_router
from team_balancer.exceptions import RosterStoreError
from team_balancer.repositories.roster_store import get_roster_store
from team_balancer.services.roster_service import RosterService

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    # Startup: Initialize store and roster service
    if not hasattr(app.state, "roster_service"):
        app.state.roster_service = RosterService(get_roster_store(settings))
    try:
        await app.state.roster_service.load()
    except RosterStoreError as e:
        # Routes retry the load; balancing never runs without a snapshot
        logger.warning(f"Initial roster load failed: {e}")
    yield
    # Shutdown: Clean up resources
    await app.state.roster_service.store.close()


app = FastAPI(
    title="Team Balancer",
    description="Splits present players into two balanced teams",
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "team-balancer"}


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": "Team Balancer API",
        "version": "0.1.0",
        "docs": "/docs",
    }


# Register routers
app.include_router(roster_router)
app.include_router(teams_router)
