"""API route registration."""

from __future__ import annotations

from fastapi import FastAPI

from docrelay.api.routes import files, health


def register_routes(app: FastAPI) -> None:
    """Register all API routers."""
    app.include_router(files.router)
    app.include_router(health.router)
