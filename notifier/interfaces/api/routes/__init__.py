from fastapi import FastAPI

from .admin_configuration import router as admin_configuration_router
from .admin_history import router as admin_history_router
from .events import router as events_router
from .preferences import router as preferences_router


def register_routes(app: FastAPI) -> None:
    """Register every API router on the FastAPI application."""

    app.include_router(events_router)
    app.include_router(preferences_router)
    app.include_router(admin_configuration_router)
    app.include_router(admin_history_router)
