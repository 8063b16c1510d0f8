"""Starlette app factory for serving a site behind the staging gate."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse
from starlette.routing import Mount, Route
from starlette.staticfiles import StaticFiles

from stagegate.environment import classify
from stagegate.middleware import StagingGateMiddleware

if TYPE_CHECKING:
    from starlette.types import ASGIApp

    from stagegate.config import Config
    from stagegate.models import GateSettings

ROBOTS_TXT = "User-agent: *\nDisallow: /\n"


async def health(request: Request) -> JSONResponse:
    """GET /api/health"""
    env = request.app.state.environment
    return JSONResponse({"status": "ok", "protected": env.is_protected})


async def robots(request: Request) -> PlainTextResponse:
    """GET /robots.txt - disallow all crawlers."""
    return PlainTextResponse(ROBOTS_TXT)


def create_app(config: Config, directory: Path | None = None) -> Starlette:
    """Create the ASGI application.

    When directory is given it is served as a static site (index.html for
    directory paths), otherwise only the health and robots routes exist.
    """
    settings = config.settings()

    routes: list[Route | Mount] = [
        Route("/api/health", health),
        Route("/robots.txt", robots),
    ]
    if directory is not None:
        routes.append(Mount("/", app=StaticFiles(directory=str(directory), html=True)))

    app = Starlette(
        routes=routes,
        middleware=[Middleware(StagingGateMiddleware, settings=settings)],
    )
    app.state.settings = settings
    app.state.environment = classify(settings)
    return app


def protect(app: ASGIApp, settings: GateSettings) -> ASGIApp:
    """Wrap an existing ASGI application with the staging gate."""
    return StagingGateMiddleware(app, settings=settings)
