"""
Dashboard Routes

Serves the dashboard page and its static assets:
- HTML template rendering, seeded with the current state
- Static file serving (CSS, JS)

Kept separate from server.py to isolate the page from the JSON API.
The page itself asks the browser for geolocation and talks to /api/*.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from fastapi import APIRouter
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from starlette.requests import Request

from .models import DashboardState

if TYPE_CHECKING:
    from .orchestrator import SearchOrchestrator

# Paths relative to this file
BASE_DIR = Path(__file__).parent
STATIC_DIR = BASE_DIR / "static"
TEMPLATES_DIR = BASE_DIR / "templates"

# Router for dashboard endpoints
router = APIRouter()

# Jinja2 templates
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

# Store orchestrator reference for the page to render from
_orchestrator: SearchOrchestrator | None = None


def set_orchestrator(orchestrator: SearchOrchestrator | None) -> None:
    """Set the orchestrator instance the page renders from."""
    global _orchestrator
    _orchestrator = orchestrator


def get_static_files() -> StaticFiles:
    return StaticFiles(directory=str(STATIC_DIR))


@router.get("/", response_class=HTMLResponse)
async def dashboard(request: Request) -> HTMLResponse:
    """Serve the main dashboard page."""
    # The page shows pending notifications once, so they are handed off here.
    state = _orchestrator.snapshot() if _orchestrator is not None else DashboardState()
    return templates.TemplateResponse(
        request,
        "dashboard.html",
        {"state": state.model_dump(mode="json")},
    )
