"""
Dashboard Server

FastAPI application exposing the search orchestrator as a small JSON API
plus the dashboard page that drives it.

Every lookup route answers 200 with a state snapshot. Lookup failures
travel inside the snapshot as notifications, never as HTTP errors.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, HTTPException

from .config import SERVER_NAME, SERVER_VERSION, configure_logging
from .dashboard import get_static_files, router as dashboard_router, set_orchestrator
from .geolocation import ReportedPosition
from .models import LocationRequest, SearchRequest
from .orchestrator import SearchOrchestrator, create_orchestrator

# -----------------------------------------------------------------------------
# Application Lifecycle
# -----------------------------------------------------------------------------

orchestrator: SearchOrchestrator | None = None


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage orchestrator lifecycle - startup and shutdown."""
    global orchestrator
    orchestrator = create_orchestrator()
    orchestrator.start()
    set_orchestrator(orchestrator)
    yield
    if orchestrator:
        await orchestrator.close()
    orchestrator = None
    set_orchestrator(None)


# -----------------------------------------------------------------------------
# FastAPI Application
# -----------------------------------------------------------------------------

app = FastAPI(
    title="Weather Dashboard",
    description="Current conditions and a 5-day forecast for any city or your location.",
    version=SERVER_VERSION,
    lifespan=lifespan,
)

# Mount dashboard UI and static files
app.include_router(dashboard_router)
app.mount("/static", get_static_files(), name="static")


def _require_orchestrator() -> SearchOrchestrator:
    if orchestrator is None:
        raise HTTPException(status_code=503, detail="Orchestrator not initialized")
    return orchestrator


def _snapshot(current: SearchOrchestrator) -> dict[str, Any]:
    return current.snapshot().model_dump(mode="json")


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy", "service": SERVER_NAME}


@app.get("/api/state")
async def get_state() -> dict[str, Any]:
    """Current dashboard state. Pending notifications are handed off once."""
    return _snapshot(_require_orchestrator())


@app.post("/api/search")
async def search(body: SearchRequest) -> dict[str, Any]:
    """Place-name lookup. Blank queries are ignored."""
    current = _require_orchestrator()
    await current.search(body.query)
    return _snapshot(current)


@app.post("/api/location")
async def use_location(body: LocationRequest) -> dict[str, Any]:
    """
    Geolocated lookup.

    The browser sends the position it obtained, or `{"denied": true}`;
    a denied or missing position falls back to the default place.
    """
    current = _require_orchestrator()
    await current.use_current_location(ReportedPosition(body.coordinates()))
    return _snapshot(current)


@app.post("/api/refresh")
async def refresh() -> dict[str, Any]:
    """Re-run the last place-name lookup."""
    current = _require_orchestrator()
    await current.refresh()
    return _snapshot(current)


@app.post("/api/recent")
async def select_recent(body: SearchRequest) -> dict[str, Any]:
    """Replay an entry from the recent-search list."""
    current = _require_orchestrator()
    await current.select_recent(body.query)
    return _snapshot(current)


def main() -> None:
    import uvicorn

    configure_logging()
    uvicorn.run(app, host="0.0.0.0", port=8000)


if __name__ == "__main__":
    main()
